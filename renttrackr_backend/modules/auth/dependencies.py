"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ..users import services as user_services
from ..users.models import User
from .jwt_service import decode_access_token
from .schemas import AuthenticatedUser

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> AuthenticatedUser:
    """Extract and validate the caller's identity from the bearer token.

    No database call happens here; every claim needed is in the token.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return AuthenticatedUser(
            id=str(payload["sub"]),
            email=payload["email"],
            name=payload.get("name"),
        )
    except KeyError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token payload: missing {e}",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_synced_user(
    identity: Annotated[AuthenticatedUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Return the caller's user row, creating it the first time they are seen."""
    return await user_services.ensure_user(db, identity)


CurrentUser = Annotated[User, Depends(get_synced_user)]
