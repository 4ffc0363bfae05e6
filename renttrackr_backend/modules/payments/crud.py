"""CRUD operations for payments."""

import uuid
from datetime import date

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..access import services as access
from ..leases.models import Lease
from ..properties.models import Property, Unit
from ..tenants.models import Tenant
from .models import Payment

PaymentRow = tuple[Payment, str, str | None, str]


def _join_lease_chain(query: Select) -> Select:
    query = query.join(Lease, Lease.id == Payment.lease_id).join(
        Tenant, Tenant.id == Lease.tenant_id
    )
    return access.join_tenant_chain(query)


def details_query() -> Select:
    """Payment rows with tenant name, unit number and property address."""
    return _join_lease_chain(
        select(Payment, Tenant.name, Unit.unit_number, Property.address).select_from(
            Payment
        )
    )


async def get_payments(db: AsyncSession, user_id: str) -> list[Payment]:
    query = _join_lease_chain(select(Payment)).where(access.property_scope(user_id))
    result = await db.execute(query.order_by(Payment.date.desc()))
    return list(result.scalars().all())


async def get_payments_between(
    db: AsyncSession, user_id: str, start: date, end: date
) -> list[Payment]:
    """Payments dated within [start, end] on the user's properties."""
    query = _join_lease_chain(select(Payment)).where(
        access.property_scope(user_id),
        Payment.date >= start,
        Payment.date <= end,
    )
    result = await db.execute(query.order_by(Payment.date))
    return list(result.scalars().all())


async def get_payments_with_details(
    db: AsyncSession, user_id: str, limit: int | None = None
) -> list[PaymentRow]:
    query = (
        details_query()
        .where(access.property_scope(user_id))
        .order_by(Payment.date.desc(), Payment.created_at.desc())
    )
    if limit is not None:
        query = query.limit(limit)
    result = await db.execute(query)
    return [tuple(row) for row in result.all()]


async def get_payment_with_details(
    db: AsyncSession, payment_id: uuid.UUID
) -> PaymentRow | None:
    result = await db.execute(details_query().where(Payment.id == payment_id))
    row = result.first()
    return tuple(row) if row else None


async def get_payments_for_leases(
    db: AsyncSession, lease_ids: list[uuid.UUID]
) -> list[Payment]:
    if not lease_ids:
        return []
    result = await db.execute(select(Payment).where(Payment.lease_id.in_(lease_ids)))
    return list(result.scalars().all())


async def create_payment(db: AsyncSession, lease_id: uuid.UUID, **fields) -> Payment:
    payment = Payment(lease_id=lease_id, **fields)
    db.add(payment)
    await db.flush()
    return payment


async def update_payment(db: AsyncSession, payment: Payment, **kwargs) -> Payment:
    for key, value in kwargs.items():
        if hasattr(payment, key):
            setattr(payment, key, value)
    await db.flush()
    return payment


async def delete_payment(db: AsyncSession, payment: Payment) -> None:
    await db.delete(payment)
    await db.flush()
