"""Expense schemas."""

import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ..commons import TimestampedResponse


class ExpenseCreate(BaseModel):
    property_id: UUID
    type: str = Field(..., min_length=1, max_length=100)
    amount: float = Field(..., ge=0)
    date: datetime.date


class ExpenseUpdate(BaseModel):
    property_id: UUID | None = None
    type: str | None = Field(None, min_length=1, max_length=100)
    amount: float | None = Field(None, ge=0)
    date: datetime.date | None = None


class ExpenseResponse(TimestampedResponse):
    property_id: UUID
    type: str
    amount: float
    date: datetime.date


class ExpenseWithPropertyResponse(ExpenseResponse):
    property_address: str | None = None


class ExpenseMetricsResponse(BaseModel):
    """Spending this month and year; the category totals are for this year."""

    total_this_month: float = 0
    total_this_year: float = 0
    maintenance: float = 0
    association: float = 0
