"""Payment business logic services."""

import calendar
import uuid
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError, ValidationError
from ...core.logging import get_logger
from ...core.utils import utc_today
from ..access import services as access
from ..leases import crud as lease_crud
from . import calculations, crud
from .models import Payment
from .schemas import (
    UNKNOWN,
    PaymentCreate,
    PaymentMetricsResponse,
    PaymentUpdate,
    PaymentWithDetailsResponse,
    RentStatusResponse,
)

logger = get_logger(__name__)


def to_details(row: tuple) -> PaymentWithDetailsResponse:
    payment, tenant_name, unit_number, property_address = row
    response = PaymentWithDetailsResponse.model_validate(payment)
    response.tenant_name = tenant_name or UNKNOWN
    response.unit_number = unit_number or UNKNOWN
    response.property_address = property_address or UNKNOWN
    return response


def month_bounds(day: date) -> tuple[date, date]:
    last_day = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last_day)


async def get_payments_with_details(
    db: AsyncSession, user_id: str, limit: int | None = None
) -> list[PaymentWithDetailsResponse]:
    rows = await crud.get_payments_with_details(db, user_id, limit=limit)
    return [to_details(row) for row in rows]


async def get_payment(
    db: AsyncSession, user_id: str, payment_id: uuid.UUID
) -> PaymentWithDetailsResponse:
    await access.ensure_payment_access(db, user_id, payment_id)
    row = await crud.get_payment_with_details(db, payment_id)
    if not row:
        raise NotFoundError("Payment not found")
    return to_details(row)


async def create_payment(
    db: AsyncSession, user_id: str, data: PaymentCreate
) -> Payment:
    """Record a payment against a lease the user may write to."""
    await access.ensure_lease_access(db, user_id, data.lease_id, write=True)

    payment = await crud.create_payment(
        db,
        data.lease_id,
        amount=data.amount,
        date=data.date,
        late_fee=data.late_fee,
    )
    await db.commit()
    logger.info(
        "Payment recorded",
        extra={"payment_id": str(payment.id), "lease_id": str(data.lease_id)},
    )
    return payment


async def update_payment(
    db: AsyncSession, user_id: str, payment_id: uuid.UUID, data: PaymentUpdate
) -> Payment:
    payment = await access.ensure_payment_access(db, user_id, payment_id, write=True)
    changes = data.model_dump(exclude_unset=True)

    for required in ("lease_id", "amount", "date"):
        if required in changes and changes[required] is None:
            raise ValidationError("Value cannot be empty", field=required)

    if "lease_id" in changes and changes["lease_id"] != payment.lease_id:
        await access.ensure_lease_access(db, user_id, changes["lease_id"], write=True)

    updated = await crud.update_payment(db, payment, **changes)
    await db.commit()
    return updated


async def delete_payment(
    db: AsyncSession, user_id: str, payment_id: uuid.UUID
) -> None:
    payment = await access.ensure_payment_access(db, user_id, payment_id, write=True)
    await crud.delete_payment(db, payment)
    await db.commit()
    logger.info("Payment deleted", extra={"payment_id": str(payment_id)})


async def get_pending_and_overdue(
    db: AsyncSession, user_id: str, today: date | None = None
) -> RentStatusResponse:
    """Unpaid rent on the user's active leases as of ``today``."""
    today = today or utc_today()
    lease_rows = await lease_crud.get_active_leases_with_details(db, user_id, today)
    payments = await crud.get_payments_for_leases(db, [row[0].id for row in lease_rows])
    return calculations.calculate_rent_status(lease_rows, payments, today)


async def get_payment_metrics(
    db: AsyncSession, user_id: str, today: date | None = None
) -> PaymentMetricsResponse:
    today = today or utc_today()
    start, end = month_bounds(today)
    month_payments = await crud.get_payments_between(db, user_id, start, end)
    collected, late_fees = calculations.month_totals(
        month_payments, today.year, today.month
    )
    status = await get_pending_and_overdue(db, user_id, today)

    return PaymentMetricsResponse(
        total_collected=collected,
        late_fees=late_fees,
        pending=status.total_pending,
        overdue=status.total_overdue,
    )
