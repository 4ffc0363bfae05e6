"""JWT handling for bearer tokens issued to RentTrackr users."""

from datetime import datetime, timedelta, timezone

import jwt

from ...config import settings

TOKEN_TYPE = "access"


def create_access_token(
    user_id: str,
    email: str,
    name: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed access token for a user."""
    now = datetime.now(timezone.utc)
    expire = now + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )

    payload = {
        "sub": user_id,
        "email": email,
        "name": name,
        "exp": expire,
        "iat": now,
        "type": TOKEN_TYPE,
    }

    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    """Decode and validate an access token.

    Returns:
        Token payload if valid, None if invalid or expired.
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None

    if payload.get("type") != TOKEN_TYPE:
        return None
    return payload
