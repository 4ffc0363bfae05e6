"""CRUD operations for leases."""

import uuid
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..access import services as access
from ..properties.models import Property, Unit
from ..tenants.models import Tenant
from .models import Lease

LeaseRow = tuple[Lease, str, str | None, uuid.UUID, str]


def details_query():
    """Lease rows with tenant name, unit number, property id and address."""
    query = (
        select(Lease, Tenant.name, Unit.unit_number, Property.id, Property.address)
        .select_from(Lease)
        .join(Tenant, Tenant.id == Lease.tenant_id)
    )
    return access.join_tenant_chain(query)


async def get_leases(db: AsyncSession, user_id: str) -> list[Lease]:
    query = access.join_tenant_chain(
        select(Lease).join(Tenant, Tenant.id == Lease.tenant_id)
    ).where(access.property_scope(user_id))
    result = await db.execute(query.order_by(Lease.start_date.desc()))
    return list(result.scalars().all())


async def get_leases_with_details(
    db: AsyncSession, user_id: str, tenant_id: uuid.UUID | None = None
) -> list[LeaseRow]:
    query = details_query().where(access.property_scope(user_id))
    if tenant_id is not None:
        query = query.where(Lease.tenant_id == tenant_id)
    result = await db.execute(query.order_by(Lease.start_date.desc()))
    return [tuple(row) for row in result.all()]


async def get_lease_with_details(
    db: AsyncSession, lease_id: uuid.UUID
) -> LeaseRow | None:
    result = await db.execute(details_query().where(Lease.id == lease_id))
    row = result.first()
    return tuple(row) if row else None


async def get_active_leases_with_details(
    db: AsyncSession, user_id: str, day: date
) -> list[LeaseRow]:
    """Leases in force on ``day``."""
    result = await db.execute(
        details_query().where(
            access.property_scope(user_id),
            Lease.start_date <= day,
            Lease.end_date >= day,
        )
    )
    return [tuple(row) for row in result.all()]


async def get_leases_ending_between(
    db: AsyncSession, user_id: str, start: date, end: date
) -> list[LeaseRow]:
    result = await db.execute(
        details_query()
        .where(
            access.property_scope(user_id),
            Lease.end_date >= start,
            Lease.end_date <= end,
        )
        .order_by(Lease.end_date)
    )
    return [tuple(row) for row in result.all()]


async def count_leases(db: AsyncSession, user_id: str) -> int:
    query = access.join_tenant_chain(
        select(func.count(Lease.id))
        .select_from(Lease)
        .join(Tenant, Tenant.id == Lease.tenant_id)
    ).where(access.property_scope(user_id))
    result = await db.execute(query)
    return result.scalar_one()


async def create_lease(db: AsyncSession, tenant_id: uuid.UUID, **fields) -> Lease:
    lease = Lease(tenant_id=tenant_id, **fields)
    db.add(lease)
    await db.flush()
    return lease


async def update_lease(db: AsyncSession, lease: Lease, **kwargs) -> Lease:
    for key, value in kwargs.items():
        if hasattr(lease, key):
            setattr(lease, key, value)
    await db.flush()
    return lease


async def delete_lease(db: AsyncSession, lease: Lease) -> None:
    await db.delete(lease)
    await db.flush()
