"""Payment schemas."""

import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ..commons import TimestampedResponse

UNKNOWN = "Unknown"


class PaymentCreate(BaseModel):
    lease_id: UUID
    amount: float = Field(..., gt=0)
    date: datetime.date
    late_fee: float | None = Field(None, ge=0)


class PaymentUpdate(BaseModel):
    lease_id: UUID | None = None
    amount: float | None = Field(None, gt=0)
    date: datetime.date | None = None
    late_fee: float | None = Field(None, ge=0)


class PaymentResponse(TimestampedResponse):
    lease_id: UUID
    amount: float
    date: datetime.date
    late_fee: float | None = None


class PaymentWithDetailsResponse(PaymentResponse):
    tenant_name: str = UNKNOWN
    unit_number: str = UNKNOWN
    property_address: str = UNKNOWN


class OutstandingRent(BaseModel):
    """Unpaid part of one month's rent on a lease."""

    lease_id: UUID
    tenant_name: str = UNKNOWN
    unit_number: str = UNKNOWN
    property_address: str = UNKNOWN
    amount: float
    due_date: datetime.date


class PendingRent(OutstandingRent):
    days_until_due: int = 0


class OverdueRent(OutstandingRent):
    days_overdue: int


class RentStatusResponse(BaseModel):
    pending: list[PendingRent] = []
    overdue: list[OverdueRent] = []
    total_pending: float = 0
    total_overdue: float = 0


class PaymentMetricsResponse(BaseModel):
    """Collections for the current month plus outstanding rent."""

    total_collected: float = 0
    late_fees: float = 0
    pending: float = 0
    overdue: float = 0
