"""CRUD operations for parking permits and activity."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..access import services as access
from ..properties.models import Property
from ..tenants.models import Tenant
from .models import ParkingActivity, ParkingPermit

PermitRow = tuple[ParkingPermit, str, str | None]


def details_query():
    return (
        select(ParkingPermit, Property.address, Tenant.name)
        .join(Property, Property.id == ParkingPermit.property_id)
        .outerjoin(Tenant, Tenant.id == ParkingPermit.tenant_id)
    )


async def get_permits(db: AsyncSession, user_id: str) -> list[ParkingPermit]:
    query = (
        select(ParkingPermit)
        .join(Property, Property.id == ParkingPermit.property_id)
        .where(access.property_scope(user_id))
        .order_by(ParkingPermit.issued_at.desc())
    )
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_permits_with_details(db: AsyncSession, user_id: str) -> list[PermitRow]:
    query = (
        details_query()
        .where(access.property_scope(user_id))
        .order_by(ParkingPermit.issued_at.desc())
    )
    result = await db.execute(query)
    return [tuple(row) for row in result.all()]


async def get_permit_with_details(
    db: AsyncSession, permit_id: uuid.UUID
) -> PermitRow | None:
    result = await db.execute(details_query().where(ParkingPermit.id == permit_id))
    row = result.first()
    return tuple(row) if row else None


async def create_permit(
    db: AsyncSession, property_id: uuid.UUID, **fields
) -> ParkingPermit:
    permit = ParkingPermit(property_id=property_id, **fields)
    db.add(permit)
    await db.flush()
    return permit


async def update_permit(
    db: AsyncSession, permit: ParkingPermit, **kwargs
) -> ParkingPermit:
    for key, value in kwargs.items():
        if hasattr(permit, key):
            setattr(permit, key, value)
    await db.flush()
    return permit


async def delete_permit(db: AsyncSession, permit: ParkingPermit) -> None:
    await db.delete(permit)
    await db.flush()


# ----- Activity -----


async def get_activity(
    db: AsyncSession, permit_id: uuid.UUID
) -> list[ParkingActivity]:
    result = await db.execute(
        select(ParkingActivity)
        .where(ParkingActivity.parking_permit_id == permit_id)
        .order_by(ParkingActivity.created_at.desc())
    )
    return list(result.scalars().all())


async def create_activity(
    db: AsyncSession, permit_id: uuid.UUID, note: str
) -> ParkingActivity:
    activity = ParkingActivity(parking_permit_id=permit_id, note=note)
    db.add(activity)
    await db.flush()
    return activity
