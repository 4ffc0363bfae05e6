"""CRUD operations for renovations and their items."""

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..access import services as access
from ..properties.models import Property, Unit
from .models import Renovation, RenovationItem

RenovationRow = tuple[Renovation, str, str | None, int]


def details_query():
    """Renovation rows with property address, unit number and item count."""
    item_counts = (
        select(
            RenovationItem.renovation_id,
            func.count(RenovationItem.id).label("item_count"),
        )
        .group_by(RenovationItem.renovation_id)
        .subquery()
    )
    return (
        select(
            Renovation,
            Property.address,
            Unit.unit_number,
            func.coalesce(item_counts.c.item_count, 0),
        )
        .join(Property, Property.id == Renovation.property_id)
        .outerjoin(Unit, Unit.id == Renovation.unit_id)
        .outerjoin(item_counts, item_counts.c.renovation_id == Renovation.id)
    )


async def get_renovations(db: AsyncSession, user_id: str) -> list[Renovation]:
    query = (
        select(Renovation)
        .join(Property, Property.id == Renovation.property_id)
        .where(access.property_scope(user_id))
        .order_by(Renovation.created_at.desc())
    )
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_renovations_with_details(
    db: AsyncSession, user_id: str
) -> list[RenovationRow]:
    query = (
        details_query()
        .where(access.property_scope(user_id))
        .order_by(Renovation.created_at.desc())
    )
    result = await db.execute(query)
    return [tuple(row) for row in result.all()]


async def get_renovation_with_items(
    db: AsyncSession, renovation_id: uuid.UUID
) -> Renovation | None:
    result = await db.execute(
        select(Renovation)
        .options(selectinload(Renovation.items))
        .where(Renovation.id == renovation_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def create_renovation(
    db: AsyncSession, property_id: uuid.UUID, **fields
) -> Renovation:
    renovation = Renovation(property_id=property_id, **fields)
    db.add(renovation)
    await db.flush()
    return renovation


async def update_renovation(
    db: AsyncSession, renovation: Renovation, **kwargs
) -> Renovation:
    for key, value in kwargs.items():
        if hasattr(renovation, key):
            setattr(renovation, key, value)
    await db.flush()
    return renovation


async def delete_renovation(db: AsyncSession, renovation: Renovation) -> None:
    await db.delete(renovation)
    await db.flush()


# ----- Items -----


async def get_items(db: AsyncSession, renovation_id: uuid.UUID) -> list[RenovationItem]:
    result = await db.execute(
        select(RenovationItem)
        .where(RenovationItem.renovation_id == renovation_id)
        .order_by(RenovationItem.created_at.desc())
    )
    return list(result.scalars().all())


async def sum_item_costs(db: AsyncSession, renovation_id: uuid.UUID) -> float:
    result = await db.execute(
        select(func.coalesce(func.sum(RenovationItem.total_cost), 0)).where(
            RenovationItem.renovation_id == renovation_id
        )
    )
    return float(result.scalar_one() or 0)


async def create_item(
    db: AsyncSession, renovation_id: uuid.UUID, **fields
) -> RenovationItem:
    item = RenovationItem(renovation_id=renovation_id, **fields)
    db.add(item)
    await db.flush()
    return item


async def update_item(db: AsyncSession, item: RenovationItem, **kwargs) -> RenovationItem:
    for key, value in kwargs.items():
        if hasattr(item, key):
            setattr(item, key, value)
    await db.flush()
    return item


async def delete_item(db: AsyncSession, item: RenovationItem) -> None:
    await db.delete(item)
    await db.flush()


async def get_renovations_by_start_date(
    db: AsyncSession, user_id: str, limit: int
) -> list[RenovationRow]:
    """Earliest-starting renovations with property and unit details.

    Undated renovations sort after dated ones on every backend.
    """
    query = (
        details_query()
        .where(access.property_scope(user_id))
        .order_by(Renovation.start_date.is_(None), Renovation.start_date)
        .limit(limit)
    )
    result = await db.execute(query)
    return [tuple(row) for row in result.all()]
