"""Move legacy directly-owned properties onto owner entities.

Properties created before owners existed only carry ``properties.user_id``.
Migrating a user gives them an owner (their first existing one, or a new
individual owner named after them with the user as admin) and links each of
their unlinked properties to it with a 100% share.
"""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.logging import get_logger
from ..users import crud as user_crud
from ..users.models import User
from . import crud
from .models import OwnerRole, OwnerType
from .schemas import MigrationResultResponse, MigrationStatusResponse

logger = get_logger(__name__)


async def _owner_for(db: AsyncSession, user: User) -> uuid.UUID:
    links = await crud.get_user_owner_links(db, user.id)
    if links:
        return links[0].owner_id

    owner = await crud.create_owner(
        db,
        name=user.name or user.email,
        type=OwnerType.INDIVIDUAL,
        email=user.email,
    )
    await crud.create_user_owner(db, user.id, owner.id, OwnerRole.ADMIN)
    logger.info(
        "Created owner for user",
        extra={"user_id": user.id, "owner_id": str(owner.id)},
    )
    return owner.id


async def migrate_properties_to_ownership_model(
    db: AsyncSession, user_id: str | None = None
) -> MigrationResultResponse:
    """Link legacy properties to owners, for one user or for everyone.

    Properties that already have an owner link are counted as skipped.
    """
    if user_id is not None:
        user = await user_crud.get_user_by_id(db, user_id)
        users = [user] if user else []
    else:
        users = await user_crud.get_all_users(db)

    result = MigrationResultResponse(total_users=len(users))

    for user in users:
        owner_id = await _owner_for(db, user)
        properties = await crud.get_direct_properties(db, user.id)
        linked = await crud.get_linked_property_ids(db, [p.id for p in properties])

        for property_obj in properties:
            if property_obj.id in linked:
                result.skipped_count += 1
                continue
            await crud.create_property_owner(db, property_obj.id, owner_id, 100)
            result.migrated_count += 1

    await db.commit()
    logger.info(
        "Ownership migration complete",
        extra={
            "migrated_count": result.migrated_count,
            "skipped_count": result.skipped_count,
            "total_users": result.total_users,
        },
    )
    return result


async def check_migration_status(
    db: AsyncSession, user_id: str | None = None
) -> MigrationStatusResponse:
    """Count properties with and without an owner link."""
    total = await crud.count_properties(db, user_id)
    needs_migration = len(await crud.get_unlinked_properties(db, user_id))
    return MigrationStatusResponse(
        total_properties=total,
        needs_migration=needs_migration,
        already_migrated=total - needs_migration,
    )
