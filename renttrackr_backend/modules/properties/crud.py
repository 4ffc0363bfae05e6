"""CRUD operations for properties and units."""

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..access import services as access
from .models import Property, Unit

# ----- Property CRUD -----


async def get_properties(db: AsyncSession, user_id: str) -> list[Property]:
    """Get every property the user can reach, newest first."""
    result = await db.execute(
        select(Property)
        .where(access.property_scope(user_id))
        .order_by(Property.created_at.desc())
    )
    return list(result.scalars().all())


async def get_property_with_units(
    db: AsyncSession, property_id: uuid.UUID
) -> Property | None:
    result = await db.execute(
        select(Property)
        .options(selectinload(Property.units))
        .where(Property.id == property_id)
    )
    return result.scalar_one_or_none()


async def count_properties(db: AsyncSession, user_id: str) -> int:
    result = await db.execute(
        select(func.count(Property.id)).where(access.property_scope(user_id))
    )
    return result.scalar_one()


async def create_property(
    db: AsyncSession,
    user_id: str,
    address: str,
    property_type: str | None = None,
    notes: str | None = None,
) -> Property:
    property_obj = Property(
        user_id=user_id,
        address=address.strip(),
        property_type=property_type,
        notes=notes,
    )
    db.add(property_obj)
    await db.flush()
    return property_obj


async def update_property(
    db: AsyncSession, property_obj: Property, **kwargs
) -> Property:
    for key, value in kwargs.items():
        if hasattr(property_obj, key):
            setattr(property_obj, key, value)
    await db.flush()
    return property_obj


async def delete_property(db: AsyncSession, property_obj: Property) -> None:
    """Delete a property; units, tenants and everything below cascade."""
    await db.delete(property_obj)
    await db.flush()


# ----- Unit CRUD -----


async def get_units_by_property(db: AsyncSession, property_id: uuid.UUID) -> list[Unit]:
    result = await db.execute(
        select(Unit).where(Unit.property_id == property_id).order_by(Unit.unit_number)
    )
    return list(result.scalars().all())


async def get_unit_by_number(
    db: AsyncSession, property_id: uuid.UUID, unit_number: str
) -> Unit | None:
    result = await db.execute(
        select(Unit).where(
            Unit.property_id == property_id, Unit.unit_number == unit_number
        )
    )
    return result.scalar_one_or_none()


async def get_unit_in_property(
    db: AsyncSession, unit_id: uuid.UUID, property_id: uuid.UUID
) -> Unit | None:
    result = await db.execute(
        select(Unit).where(Unit.id == unit_id, Unit.property_id == property_id)
    )
    return result.scalar_one_or_none()


async def create_unit(
    db: AsyncSession, property_id: uuid.UUID, unit_number: str, rent_amount: float
) -> Unit:
    unit = Unit(
        property_id=property_id,
        unit_number=unit_number.strip(),
        rent_amount=rent_amount,
    )
    db.add(unit)
    await db.flush()
    return unit


async def update_unit(db: AsyncSession, unit: Unit, **kwargs) -> Unit:
    for key, value in kwargs.items():
        if value is not None and hasattr(unit, key):
            setattr(unit, key, value)
    await db.flush()
    return unit


async def delete_unit(db: AsyncSession, unit: Unit) -> None:
    await db.delete(unit)
    await db.flush()
