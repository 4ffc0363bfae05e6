"""Tenant business logic services."""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError, ValidationError
from ...core.logging import get_logger
from ..access import services as access
from ..properties import crud as property_crud
from . import crud
from .models import Tenant
from .schemas import TenantCreate, TenantUpdate, TenantWithDetailsResponse

logger = get_logger(__name__)


def to_details(row: tuple) -> TenantWithDetailsResponse:
    tenant, unit_number, property_address = row
    response = TenantWithDetailsResponse.model_validate(tenant)
    response.unit_number = unit_number
    response.property_address = property_address
    return response


async def _validate_unit(
    db: AsyncSession, unit_id: uuid.UUID, property_id: uuid.UUID
) -> None:
    unit = await property_crud.get_unit_in_property(db, unit_id, property_id)
    if not unit:
        raise NotFoundError("Unit not found or does not belong to property")


async def get_user_tenants(
    db: AsyncSession, user_id: str
) -> list[TenantWithDetailsResponse]:
    rows = await crud.get_tenants_with_details(db, user_id)
    return [to_details(row) for row in rows]


async def get_tenant(
    db: AsyncSession, user_id: str, tenant_id: uuid.UUID
) -> TenantWithDetailsResponse:
    await access.ensure_tenant_access(db, user_id, tenant_id)
    row = await crud.get_tenant_with_details(db, tenant_id)
    if not row:
        raise NotFoundError("Tenant not found")
    return to_details(row)


async def get_tenant_count(db: AsyncSession, user_id: str) -> int:
    return await crud.count_tenants(db, user_id)


async def create_tenant(db: AsyncSession, user_id: str, data: TenantCreate) -> Tenant:
    """Create a tenant on a property, optionally in one of its units.

    Raises:
        NotFoundError: If the property is not writable by the user or the
            unit is not part of it
    """
    await access.ensure_property_access(db, user_id, data.property_id, write=True)
    if data.unit_id is not None:
        await _validate_unit(db, data.unit_id, data.property_id)

    tenant = await crud.create_tenant(
        db,
        property_id=data.property_id,
        unit_id=data.unit_id,
        name=data.name,
        phone=data.phone,
        email=data.email,
    )
    await db.commit()
    logger.info("Tenant created", extra={"tenant_id": str(tenant.id)})
    return tenant


async def update_tenant(
    db: AsyncSession, user_id: str, tenant_id: uuid.UUID, data: TenantUpdate
) -> Tenant:
    """Update a tenant; moving it re-checks the destination property and unit."""
    tenant = await access.ensure_tenant_access(db, user_id, tenant_id, write=True)
    changes = data.model_dump(exclude_unset=True)

    if "name" in changes and not changes["name"]:
        raise ValidationError("Name cannot be empty", field="name")

    if changes.get("property_id") is None:
        changes.pop("property_id", None)

    target_property_id = changes.get("property_id", tenant.property_id)
    if target_property_id != tenant.property_id:
        await access.ensure_property_access(db, user_id, target_property_id, write=True)
        if "unit_id" not in changes:
            changes["unit_id"] = None

    if changes.get("unit_id") is not None:
        await _validate_unit(db, changes["unit_id"], target_property_id)

    updated = await crud.update_tenant(db, tenant, **changes)
    await db.commit()
    return updated


async def delete_tenant(db: AsyncSession, user_id: str, tenant_id: uuid.UUID) -> None:
    """Delete a tenant; leases, payments and permits cascade with it."""
    tenant = await access.ensure_tenant_access(db, user_id, tenant_id, write=True)
    await crud.delete_tenant(db, tenant)
    await db.commit()
    logger.info("Tenant deleted", extra={"tenant_id": str(tenant_id)})
