"""Parking permit business logic services."""

import uuid
from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError, PermissionError, ValidationError
from ...core.logging import get_logger
from ..access import services as access
from . import crud
from .models import ParkingActivity, ParkingPermit, ParkingPermitStatus
from .schemas import (
    ParkingActivityCreate,
    ParkingMetricsResponse,
    ParkingPermitCreate,
    ParkingPermitUpdate,
    ParkingPermitWithDetailsResponse,
)

logger = get_logger(__name__)


def to_details(row: tuple) -> ParkingPermitWithDetailsResponse:
    permit, property_address, tenant_name = row
    response = ParkingPermitWithDetailsResponse.model_validate(permit)
    response.property_address = property_address or "Unknown"
    response.tenant_name = tenant_name
    return response


def calculate_parking_metrics(
    permits: Iterable[ParkingPermit],
) -> ParkingMetricsResponse:
    metrics = ParkingMetricsResponse()
    for permit in permits:
        metrics.total_permits += 1
        if permit.status == ParkingPermitStatus.ACTIVE:
            metrics.active_permits += 1
        elif permit.status == ParkingPermitStatus.CANCELLED:
            metrics.cancelled_permits += 1
    return metrics


async def _validate_tenant(db: AsyncSession, user_id: str, tenant_id: uuid.UUID) -> None:
    try:
        await access.ensure_tenant_access(db, user_id, tenant_id)
    except NotFoundError:
        raise PermissionError("Tenant does not belong to your properties") from None


async def get_parking_permits_with_details(
    db: AsyncSession, user_id: str
) -> list[ParkingPermitWithDetailsResponse]:
    rows = await crud.get_permits_with_details(db, user_id)
    return [to_details(row) for row in rows]


async def get_parking_permit(
    db: AsyncSession, user_id: str, permit_id: uuid.UUID
) -> ParkingPermitWithDetailsResponse:
    await access.ensure_parking_permit_access(db, user_id, permit_id)
    row = await crud.get_permit_with_details(db, permit_id)
    if not row:
        raise NotFoundError("Parking permit not found")
    return to_details(row)


async def create_parking_permit(
    db: AsyncSession, user_id: str, data: ParkingPermitCreate
) -> ParkingPermit:
    """Issue a permit on a property, optionally for one of the user's tenants."""
    await access.ensure_property_access(db, user_id, data.property_id, write=True)
    if data.tenant_id is not None:
        await _validate_tenant(db, user_id, data.tenant_id)

    fields = data.model_dump(exclude={"property_id"})
    fields["permit_number"] = data.permit_number.strip()
    permit = await crud.create_permit(db, data.property_id, **fields)
    await db.commit()
    logger.info(
        "Parking permit issued",
        extra={"permit_id": str(permit.id), "property_id": str(data.property_id)},
    )
    return permit


async def update_parking_permit(
    db: AsyncSession, user_id: str, permit_id: uuid.UUID, data: ParkingPermitUpdate
) -> ParkingPermit:
    """Update a permit; a status change is recorded in its activity log."""
    permit = await access.ensure_parking_permit_access(
        db, user_id, permit_id, write=True
    )
    changes = data.model_dump(exclude_unset=True)

    for required in ("permit_number", "status"):
        if required in changes and changes[required] is None:
            raise ValidationError("Value cannot be empty", field=required)

    previous_status = permit.status
    updated = await crud.update_permit(db, permit, **changes)

    if "status" in changes and changes["status"] != previous_status:
        await crud.create_activity(
            db,
            permit_id,
            f"Status changed from {previous_status.value} to {changes['status'].value}",
        )

    await db.commit()
    return updated


async def delete_parking_permit(
    db: AsyncSession, user_id: str, permit_id: uuid.UUID
) -> None:
    permit = await access.ensure_parking_permit_access(
        db, user_id, permit_id, write=True
    )
    await crud.delete_permit(db, permit)
    await db.commit()
    logger.info("Parking permit deleted", extra={"permit_id": str(permit_id)})


async def get_parking_activity(
    db: AsyncSession, user_id: str, permit_id: uuid.UUID
) -> list[ParkingActivity]:
    await access.ensure_parking_permit_access(db, user_id, permit_id)
    return await crud.get_activity(db, permit_id)


async def add_parking_activity(
    db: AsyncSession, user_id: str, permit_id: uuid.UUID, data: ParkingActivityCreate
) -> ParkingActivity:
    await access.ensure_parking_permit_access(db, user_id, permit_id, write=True)
    activity = await crud.create_activity(db, permit_id, data.note.strip())
    await db.commit()
    return activity


async def get_parking_metrics(db: AsyncSession, user_id: str) -> ParkingMetricsResponse:
    permits = await crud.get_permits(db, user_id)
    return calculate_parking_metrics(permits)
