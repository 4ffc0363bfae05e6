"""Lease business logic services."""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError, ValidationError
from ...core.logging import get_logger
from ..access import services as access
from . import crud
from .models import Lease
from .schemas import LeaseCreate, LeaseUpdate, LeaseWithTenantResponse

logger = get_logger(__name__)


def to_details(row: tuple) -> LeaseWithTenantResponse:
    lease, tenant_name, unit_number, property_id, property_address = row
    response = LeaseWithTenantResponse.model_validate(lease)
    response.tenant_name = tenant_name
    response.unit_number = unit_number
    response.property_id = property_id
    response.property_address = property_address
    return response


async def get_leases_with_tenant_info(
    db: AsyncSession, user_id: str
) -> list[LeaseWithTenantResponse]:
    rows = await crud.get_leases_with_details(db, user_id)
    return [to_details(row) for row in rows]


async def get_leases_by_tenant_id(
    db: AsyncSession, user_id: str, tenant_id: uuid.UUID
) -> list[LeaseWithTenantResponse]:
    await access.ensure_tenant_access(db, user_id, tenant_id)
    rows = await crud.get_leases_with_details(db, user_id, tenant_id=tenant_id)
    return [to_details(row) for row in rows]


async def get_lease(
    db: AsyncSession, user_id: str, lease_id: uuid.UUID
) -> LeaseWithTenantResponse:
    await access.ensure_lease_access(db, user_id, lease_id)
    row = await crud.get_lease_with_details(db, lease_id)
    if not row:
        raise NotFoundError("Lease not found")
    return to_details(row)


async def create_lease(db: AsyncSession, user_id: str, data: LeaseCreate) -> Lease:
    await access.ensure_tenant_access(db, user_id, data.tenant_id, write=True)

    lease = await crud.create_lease(
        db,
        data.tenant_id,
        start_date=data.start_date,
        end_date=data.end_date,
        rent=data.rent,
        deposit=data.deposit,
        security_deposit=data.security_deposit,
        pet_deposit=data.pet_deposit,
    )
    await db.commit()
    logger.info(
        "Lease created",
        extra={"lease_id": str(lease.id), "tenant_id": str(data.tenant_id)},
    )
    return lease


async def update_lease(
    db: AsyncSession, user_id: str, lease_id: uuid.UUID, data: LeaseUpdate
) -> Lease:
    lease = await access.ensure_lease_access(db, user_id, lease_id, write=True)
    changes = data.model_dump(exclude_unset=True)

    for required in ("tenant_id", "start_date", "end_date", "rent", "deposit"):
        if required in changes and changes[required] is None:
            raise ValidationError("Value cannot be empty", field=required)

    if "tenant_id" in changes and changes["tenant_id"] != lease.tenant_id:
        await access.ensure_tenant_access(db, user_id, changes["tenant_id"], write=True)

    start_date = changes.get("start_date", lease.start_date)
    end_date = changes.get("end_date", lease.end_date)
    if end_date < start_date:
        raise ValidationError("End date must be after start date", field="end_date")

    updated = await crud.update_lease(db, lease, **changes)
    await db.commit()
    return updated


async def delete_lease(db: AsyncSession, user_id: str, lease_id: uuid.UUID) -> None:
    """Delete a lease and its payments."""
    lease = await access.ensure_lease_access(db, user_id, lease_id, write=True)
    await crud.delete_lease(db, lease)
    await db.commit()
