"""CRUD operations for tenants."""

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..access import services as access
from ..properties.models import Property, Unit
from .models import Tenant


def _details_query():
    query = select(Tenant, Unit.unit_number, Property.address).select_from(Tenant)
    return access.join_tenant_chain(query)


async def get_tenants_with_details(
    db: AsyncSession, user_id: str
) -> list[tuple[Tenant, str | None, str]]:
    """Get tenants on the user's properties with unit number and address."""
    result = await db.execute(
        _details_query()
        .where(access.property_scope(user_id))
        .order_by(Tenant.name)
    )
    return [tuple(row) for row in result.all()]


async def get_tenant_with_details(
    db: AsyncSession, tenant_id: uuid.UUID
) -> tuple[Tenant, str | None, str] | None:
    result = await db.execute(_details_query().where(Tenant.id == tenant_id))
    row = result.first()
    return tuple(row) if row else None


async def count_tenants(db: AsyncSession, user_id: str) -> int:
    query = access.join_tenant_chain(
        select(func.count(Tenant.id)).select_from(Tenant)
    ).where(access.property_scope(user_id))
    result = await db.execute(query)
    return result.scalar_one()


async def get_first_tenant(db: AsyncSession, user_id: str) -> Tenant | None:
    query = access.join_tenant_chain(select(Tenant)).where(
        access.property_scope(user_id)
    )
    result = await db.execute(query.order_by(Tenant.created_at).limit(1))
    return result.scalar_one_or_none()


async def create_tenant(
    db: AsyncSession,
    property_id: uuid.UUID,
    name: str,
    unit_id: uuid.UUID | None = None,
    phone: str | None = None,
    email: str | None = None,
) -> Tenant:
    tenant = Tenant(
        property_id=property_id,
        unit_id=unit_id,
        name=name.strip(),
        phone=phone,
        email=email,
    )
    db.add(tenant)
    await db.flush()
    return tenant


async def update_tenant(db: AsyncSession, tenant: Tenant, **kwargs) -> Tenant:
    for key, value in kwargs.items():
        if hasattr(tenant, key):
            setattr(tenant, key, value)
    await db.flush()
    return tenant


async def delete_tenant(db: AsyncSession, tenant: Tenant) -> None:
    await db.delete(tenant)
    await db.flush()
