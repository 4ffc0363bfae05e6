"""Renovation business logic services."""

import uuid
from collections.abc import Iterable
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError, ValidationError
from ...core.logging import get_logger
from ...core.utils import utc_today
from ..access import services as access
from ..properties import crud as property_crud
from . import crud
from .models import Renovation, RenovationItem
from .schemas import (
    RenovationCreate,
    RenovationItemCreate,
    RenovationItemUpdate,
    RenovationMetricsResponse,
    RenovationUpdate,
    RenovationWithDetailsResponse,
)

logger = get_logger(__name__)


def to_details(row: tuple) -> RenovationWithDetailsResponse:
    renovation, property_address, unit_number, item_count = row
    response = RenovationWithDetailsResponse.model_validate(renovation)
    response.property_address = property_address or "Unknown"
    response.unit_number = unit_number
    response.item_count = item_count or 0
    return response


def item_total(quantity: int | None, unit_cost: float | None) -> float | None:
    if unit_cost is None:
        return None
    return round((quantity or 1) * unit_cost, 2)


def calculate_renovation_metrics(
    renovations: Iterable[Renovation], today: date
) -> RenovationMetricsResponse:
    metrics = RenovationMetricsResponse()
    for renovation in renovations:
        if not renovation.start_date:
            metrics.pending += 1
        elif not renovation.end_date or renovation.end_date >= today:
            metrics.in_progress += 1
        if renovation.end_date and renovation.end_date < today:
            metrics.completed += 1
        metrics.total_cost += renovation.total_cost or 0
    metrics.total_cost = round(metrics.total_cost, 2)
    return metrics


async def _validate_unit(
    db: AsyncSession, unit_id: uuid.UUID, property_id: uuid.UUID
) -> None:
    unit = await property_crud.get_unit_in_property(db, unit_id, property_id)
    if not unit:
        raise NotFoundError("Unit not found or does not belong to property")


async def _refresh_total_cost(db: AsyncSession, renovation_id: uuid.UUID) -> float:
    """Set the renovation's total to the sum of its item totals."""
    renovation = await db.get(Renovation, renovation_id)
    total = round(await crud.sum_item_costs(db, renovation_id), 2)
    await crud.update_renovation(db, renovation, total_cost=total)
    return total


async def get_renovations_with_details(
    db: AsyncSession, user_id: str
) -> list[RenovationWithDetailsResponse]:
    rows = await crud.get_renovations_with_details(db, user_id)
    return [to_details(row) for row in rows]


async def get_renovation(
    db: AsyncSession, user_id: str, renovation_id: uuid.UUID
) -> Renovation:
    """Get a renovation with its items."""
    await access.ensure_renovation_access(db, user_id, renovation_id)
    renovation = await crud.get_renovation_with_items(db, renovation_id)
    if not renovation:
        raise NotFoundError("Renovation not found")
    return renovation


async def create_renovation(
    db: AsyncSession, user_id: str, data: RenovationCreate
) -> Renovation:
    await access.ensure_property_access(db, user_id, data.property_id, write=True)
    if data.unit_id is not None:
        await _validate_unit(db, data.unit_id, data.property_id)

    renovation = await crud.create_renovation(
        db,
        data.property_id,
        unit_id=data.unit_id,
        title=data.title.strip(),
        start_date=data.start_date,
        end_date=data.end_date,
        total_cost=data.total_cost,
        notes=data.notes,
    )
    await db.commit()
    logger.info("Renovation created", extra={"renovation_id": str(renovation.id)})
    return renovation


async def update_renovation(
    db: AsyncSession, user_id: str, renovation_id: uuid.UUID, data: RenovationUpdate
) -> Renovation:
    renovation = await access.ensure_renovation_access(
        db, user_id, renovation_id, write=True
    )
    changes = data.model_dump(exclude_unset=True)

    for required in ("property_id", "title", "total_cost"):
        if required in changes and changes[required] is None:
            raise ValidationError("Value cannot be empty", field=required)

    target_property_id = changes.get("property_id", renovation.property_id)
    if target_property_id != renovation.property_id:
        await access.ensure_property_access(db, user_id, target_property_id, write=True)
        if "unit_id" not in changes:
            changes["unit_id"] = None

    if changes.get("unit_id") is not None:
        await _validate_unit(db, changes["unit_id"], target_property_id)

    start_date = changes.get("start_date", renovation.start_date)
    end_date = changes.get("end_date", renovation.end_date)
    if start_date and end_date and end_date < start_date:
        raise ValidationError("End date must be after start date", field="end_date")

    updated = await crud.update_renovation(db, renovation, **changes)
    await db.commit()
    return updated


async def delete_renovation(
    db: AsyncSession, user_id: str, renovation_id: uuid.UUID
) -> None:
    """Delete a renovation with all of its items."""
    renovation = await access.ensure_renovation_access(
        db, user_id, renovation_id, write=True
    )
    await crud.delete_renovation(db, renovation)
    await db.commit()
    logger.info("Renovation deleted", extra={"renovation_id": str(renovation_id)})


async def get_renovation_metrics(
    db: AsyncSession, user_id: str, today: date | None = None
) -> RenovationMetricsResponse:
    renovations = await crud.get_renovations(db, user_id)
    return calculate_renovation_metrics(renovations, today or utc_today())


# ----- Items -----


async def get_renovation_items(
    db: AsyncSession, user_id: str, renovation_id: uuid.UUID
) -> list[RenovationItem]:
    await access.ensure_renovation_access(db, user_id, renovation_id)
    return await crud.get_items(db, renovation_id)


async def create_renovation_item(
    db: AsyncSession,
    user_id: str,
    renovation_id: uuid.UUID,
    data: RenovationItemCreate,
) -> RenovationItem:
    """Add an item and roll its cost into the renovation total."""
    await access.ensure_renovation_access(db, user_id, renovation_id, write=True)

    total_cost = data.total_cost
    if total_cost is None:
        total_cost = item_total(data.quantity, data.unit_cost)

    item = await crud.create_item(
        db,
        renovation_id,
        category=data.category.strip(),
        description=data.description,
        vendor=data.vendor,
        quantity=data.quantity,
        unit_cost=data.unit_cost,
        total_cost=total_cost,
        purchase_date=data.purchase_date,
        notes=data.notes,
    )
    await _refresh_total_cost(db, renovation_id)
    await db.commit()
    logger.info(
        "Renovation item added",
        extra={"renovation_id": str(renovation_id), "item_id": str(item.id)},
    )
    return item


async def update_renovation_item(
    db: AsyncSession, user_id: str, item_id: uuid.UUID, data: RenovationItemUpdate
) -> RenovationItem:
    item = await access.ensure_renovation_item_access(db, user_id, item_id, write=True)
    changes = data.model_dump(exclude_unset=True)

    for required in ("category", "quantity"):
        if required in changes and changes[required] is None:
            raise ValidationError("Value cannot be empty", field=required)

    if "total_cost" not in changes and ({"quantity", "unit_cost"} & changes.keys()):
        changes["total_cost"] = item_total(
            changes.get("quantity", item.quantity),
            changes.get("unit_cost", item.unit_cost),
        )

    updated = await crud.update_item(db, item, **changes)
    await _refresh_total_cost(db, item.renovation_id)
    await db.commit()
    return updated


async def delete_renovation_item(
    db: AsyncSession, user_id: str, item_id: uuid.UUID
) -> uuid.UUID:
    """Delete an item; returns the id of its renovation."""
    item = await access.ensure_renovation_item_access(db, user_id, item_id, write=True)
    renovation_id = item.renovation_id
    await crud.delete_item(db, item)
    await _refresh_total_cost(db, renovation_id)
    await db.commit()
    return renovation_id
