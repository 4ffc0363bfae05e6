"""User business logic services.

Users are created lazily: the first authenticated request from an identity
inserts its row. Creation is idempotent by id and by email.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import (
    NotFoundError,
    ResourceAlreadyExistsError,
    ValidationError,
)
from ...core.logging import get_logger
from . import crud
from .models import User
from .schemas import UserCreate, UserUpdate

logger = get_logger(__name__)


async def create_user(db: AsyncSession, data: UserCreate) -> User:
    """Create a user, or return the one already stored for this id or email."""
    existing = await crud.get_user_by_id(db, data.id)
    if existing:
        return existing

    existing = await crud.get_user_by_email(db, data.email)
    if existing:
        logger.warning(
            "User with this email already exists under a different id",
            extra={"existing_user_id": existing.id, "requested_user_id": data.id},
        )
        return existing

    user = await crud.create_user(db, data.id, data.email, data.name)
    await db.commit()
    logger.info("User created", extra={"user_id": user.id})
    return user


async def ensure_user(db: AsyncSession, identity) -> User:
    """Return the user for an authenticated identity, creating it if needed."""
    user = await crud.get_user_by_id(db, identity.id)
    if user:
        return user
    return await create_user(
        db, UserCreate(id=identity.id, email=identity.email, name=identity.name)
    )


async def get_user(db: AsyncSession, user_id: str) -> User:
    user = await crud.get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


async def update_user(db: AsyncSession, user_id: str, data: UserUpdate) -> User:
    user = await get_user(db, user_id)
    changes = data.model_dump(exclude_unset=True)
    if "email" in changes and not changes["email"]:
        raise ValidationError("Value cannot be empty", field="email")

    new_email = changes.get("email")
    if new_email and new_email.lower() != user.email.lower():
        other = await crud.get_user_by_email(db, new_email)
        if other and other.id != user.id:
            raise ResourceAlreadyExistsError("User", new_email)

    updated = await crud.update_user(db, user, **changes)
    await db.commit()
    return updated


async def delete_user(db: AsyncSession, user_id: str) -> None:
    """Delete a user; their directly owned properties cascade with them."""
    user = await get_user(db, user_id)
    await crud.delete_user(db, user)
    await db.commit()
    logger.info("User deleted", extra={"user_id": user_id})
