"""Queries feeding the financial reports.

Each function loads one report's rows for every property the user can
reach. Aggregation happens in ``reports``.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased, selectinload

from ..access import services as access
from ..leases.models import Lease
from ..parking.models import ParkingPermit
from ..payments.models import Payment
from ..properties.models import Property, Unit
from ..renovations import crud as renovation_crud
from ..renovations.models import Renovation
from ..tenants.models import Tenant

PaymentReportRow = tuple[Payment, str, str | None, str | None, str, float]
PermitReportRow = tuple[ParkingPermit, str, str | None, str | None]


async def get_payment_report_rows(
    db: AsyncSession, user_id: str
) -> list[PaymentReportRow]:
    """Payments, newest first, with tenant, unit, property and lease rent."""
    query = access.join_tenant_chain(
        select(
            Payment,
            Tenant.name,
            Tenant.email,
            Unit.unit_number,
            Property.address,
            Lease.rent,
        )
        .select_from(Payment)
        .join(Lease, Lease.id == Payment.lease_id)
        .join(Tenant, Tenant.id == Lease.tenant_id)
    ).where(access.property_scope(user_id))
    result = await db.execute(
        query.order_by(Payment.date.desc(), Payment.created_at.desc())
    )
    return [tuple(row) for row in result.all()]


async def get_properties_with_units(db: AsyncSession, user_id: str) -> list[Property]:
    result = await db.execute(
        select(Property)
        .options(selectinload(Property.units))
        .where(access.property_scope(user_id))
        .order_by(Property.created_at)
    )
    return list(result.scalars().all())


async def get_tenants(db: AsyncSession, user_id: str) -> list[Tenant]:
    query = access.join_tenant_chain(select(Tenant)).where(
        access.property_scope(user_id)
    )
    result = await db.execute(query.order_by(Tenant.created_at))
    return list(result.scalars().all())


async def get_renovation_report_rows(
    db: AsyncSession, user_id: str
) -> list[renovation_crud.RenovationRow]:
    """Renovations by start date, latest first."""
    query = (
        renovation_crud.details_query()
        .where(access.property_scope(user_id))
        .order_by(Renovation.start_date.desc(), Renovation.created_at.desc())
    )
    result = await db.execute(query)
    return [tuple(row) for row in result.all()]


async def get_permit_report_rows(
    db: AsyncSession, user_id: str
) -> list[PermitReportRow]:
    """Permits, newest first, with address, tenant name and tenant's unit."""
    tenant_unit = aliased(Unit)
    query = (
        select(ParkingPermit, Property.address, Tenant.name, tenant_unit.unit_number)
        .join(Property, Property.id == ParkingPermit.property_id)
        .outerjoin(Tenant, Tenant.id == ParkingPermit.tenant_id)
        .outerjoin(tenant_unit, tenant_unit.id == Tenant.unit_id)
        .where(access.property_scope(user_id))
        .order_by(ParkingPermit.issued_at.desc())
    )
    result = await db.execute(query)
    return [tuple(row) for row in result.all()]
