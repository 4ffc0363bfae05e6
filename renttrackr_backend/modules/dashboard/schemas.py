"""Dashboard schemas."""

from datetime import date
from enum import Enum
from uuid import UUID

from pydantic import BaseModel

from ..expenses.schemas import ExpenseMetricsResponse
from ..payments.schemas import PaymentMetricsResponse, PaymentWithDetailsResponse


class TaskType(str, Enum):
    RENOVATION = "renovation"
    LEASE_RENEWAL = "lease_renewal"


class UpcomingTask(BaseModel):
    id: UUID
    type: TaskType
    title: str
    description: str
    due_date: date | None = None
    priority: str
    status: str


class DashboardActivityResponse(BaseModel):
    recent_payments: list[PaymentWithDetailsResponse] = []
    upcoming_tasks: list[UpcomingTask] = []


class DashboardSummaryResponse(BaseModel):
    property_count: int = 0
    tenant_count: int = 0
    payments: PaymentMetricsResponse
    expenses: ExpenseMetricsResponse
