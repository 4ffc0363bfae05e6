"""Property and unit business logic services."""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError, ValidationError
from ...core.logging import get_logger
from ..access import services as access
from ..owners import crud as owner_crud
from . import crud
from .models import Property, Unit
from .schemas import PropertyCreate, PropertyUpdate, UnitCreate, UnitUpdate

logger = get_logger(__name__)

# ----- Property Services -----


async def get_user_properties(db: AsyncSession, user_id: str) -> list[Property]:
    return await crud.get_properties(db, user_id)


async def get_property(
    db: AsyncSession, user_id: str, property_id: uuid.UUID
) -> Property:
    """Get a property with its units."""
    await access.ensure_property_access(db, user_id, property_id)
    property_obj = await crud.get_property_with_units(db, property_id)
    if not property_obj:
        raise NotFoundError("Property not found or unauthorized")
    return property_obj


async def get_property_count(db: AsyncSession, user_id: str) -> int:
    return await crud.count_properties(db, user_id)


async def create_property(
    db: AsyncSession, user_id: str, data: PropertyCreate
) -> Property:
    """Create a property owned by the user, optionally under an owner entity.

    Raises:
        PermissionError: If ``owner_id`` is given and the user is not an
            admin or editor of that owner
    """
    if data.owner_id is not None:
        await access.ensure_owner_role(db, user_id, data.owner_id, access.WRITE_ROLES)

    property_obj = await crud.create_property(
        db,
        user_id=user_id,
        address=data.address,
        property_type=data.property_type,
        notes=data.notes,
    )

    if data.owner_id is not None:
        await owner_crud.create_property_owner(
            db, property_obj.id, data.owner_id, ownership_percentage=100
        )

    await db.commit()
    logger.info(
        "Property created",
        extra={"property_id": str(property_obj.id), "user_id": user_id},
    )
    return property_obj


async def update_property(
    db: AsyncSession, user_id: str, property_id: uuid.UUID, data: PropertyUpdate
) -> Property:
    property_obj = await access.ensure_property_access(
        db, user_id, property_id, write=True
    )
    changes = data.model_dump(exclude_unset=True)
    if "address" in changes and changes["address"] is None:
        raise ValidationError("Address cannot be empty", field="address")

    updated = await crud.update_property(db, property_obj, **changes)
    await db.commit()
    return updated


async def delete_property(
    db: AsyncSession, user_id: str, property_id: uuid.UUID
) -> None:
    property_obj = await access.ensure_property_access(
        db, user_id, property_id, write=True
    )
    await crud.delete_property(db, property_obj)
    await db.commit()
    logger.info(
        "Property deleted",
        extra={"property_id": str(property_id), "user_id": user_id},
    )


# ----- Unit Services -----


async def get_property_units(
    db: AsyncSession, user_id: str, property_id: uuid.UUID
) -> list[Unit]:
    await access.ensure_property_access(db, user_id, property_id)
    return await crud.get_units_by_property(db, property_id)


async def create_unit(
    db: AsyncSession, user_id: str, property_id: uuid.UUID, data: UnitCreate
) -> Unit:
    """Add a unit to a property.

    Raises:
        NotFoundError: If the property is not writable by the user
        ValidationError: If the unit number is already used in the property
    """
    await access.ensure_property_access(db, user_id, property_id, write=True)

    unit_number = data.unit_number.strip()
    existing = await crud.get_unit_by_number(db, property_id, unit_number)
    if existing:
        raise ValidationError(
            f"Unit '{unit_number}' already exists for this property",
            field="unit_number",
        )

    unit = await crud.create_unit(db, property_id, unit_number, data.rent_amount)
    await db.commit()
    return unit


async def update_unit(
    db: AsyncSession, user_id: str, unit_id: uuid.UUID, data: UnitUpdate
) -> Unit:
    unit = await access.ensure_unit_access(db, user_id, unit_id, write=True)
    changes = data.model_dump(exclude_unset=True)

    new_number = changes.get("unit_number")
    if new_number and new_number.strip() != unit.unit_number:
        existing = await crud.get_unit_by_number(
            db, unit.property_id, new_number.strip()
        )
        if existing:
            raise ValidationError(
                f"Unit '{new_number}' already exists for this property",
                field="unit_number",
            )
        changes["unit_number"] = new_number.strip()

    updated = await crud.update_unit(db, unit, **changes)
    await db.commit()
    return updated


async def delete_unit(db: AsyncSession, user_id: str, unit_id: uuid.UUID) -> None:
    """Delete a unit; its tenants (and their leases) cascade with it."""
    unit = await access.ensure_unit_access(db, user_id, unit_id, write=True)
    await crud.delete_unit(db, unit)
    await db.commit()
