"""Dashboard aggregation services."""

from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.utils import utc_today
from ..expenses import services as expense_services
from ..leases import crud as lease_crud
from ..payments import services as payment_services
from ..payments.schemas import PaymentWithDetailsResponse
from ..properties import crud as property_crud
from ..renovations import crud as renovation_crud
from ..tenants import crud as tenant_crud
from .schemas import (
    DashboardActivityResponse,
    DashboardSummaryResponse,
    TaskType,
    UpcomingTask,
)

RENEWAL_WINDOW_DAYS = 30


def _unit_suffix(unit_number: str | None) -> str:
    return f" - Unit {unit_number}" if unit_number else ""


def renovation_task(row: tuple) -> UpcomingTask:
    renovation, address, unit_number, _item_count = row
    return UpcomingTask(
        id=renovation.id,
        type=TaskType.RENOVATION,
        title=renovation.title,
        description=(
            f"Renovation at {address or 'Unknown'}{_unit_suffix(unit_number)}"
        ),
        due_date=renovation.start_date,
        priority="medium",
        status="scheduled" if renovation.start_date else "pending",
    )


def lease_renewal_task(row: tuple) -> UpcomingTask:
    lease, tenant_name, unit_number, _property_id, address = row
    return UpcomingTask(
        id=lease.id,
        type=TaskType.LEASE_RENEWAL,
        title="Lease Renewal",
        description=(
            f"Lease renewal for {tenant_name or 'Unknown'} at "
            f"{address or 'Unknown'}{_unit_suffix(unit_number)}"
        ),
        due_date=lease.end_date,
        priority="high",
        status="upcoming",
    )


def sort_tasks(tasks: list[UpcomingTask], limit: int) -> list[UpcomingTask]:
    """Order by due date with undated tasks last, then cut to ``limit``."""
    ordered = sorted(
        tasks,
        key=lambda task: (task.due_date is None, task.due_date or date.max),
    )
    return ordered[:limit]


async def get_recent_payments(
    db: AsyncSession, user_id: str, limit: int = 5
) -> list[PaymentWithDetailsResponse]:
    return await payment_services.get_payments_with_details(db, user_id, limit=limit)


async def get_upcoming_tasks(
    db: AsyncSession, user_id: str, limit: int = 5, today: date | None = None
) -> list[UpcomingTask]:
    """Renovations and lease renewals due within the next 30 days."""
    today = today or utc_today()

    renovation_rows = await renovation_crud.get_renovations_by_start_date(
        db, user_id, limit
    )
    lease_rows = await lease_crud.get_leases_ending_between(
        db, user_id, today, today + timedelta(days=RENEWAL_WINDOW_DAYS)
    )

    tasks = [renovation_task(row) for row in renovation_rows]
    tasks.extend(lease_renewal_task(row) for row in lease_rows[:limit])
    return sort_tasks(tasks, limit)


async def get_dashboard_activity(
    db: AsyncSession, user_id: str, today: date | None = None
) -> DashboardActivityResponse:
    return DashboardActivityResponse(
        recent_payments=await get_recent_payments(db, user_id),
        upcoming_tasks=await get_upcoming_tasks(db, user_id, today=today),
    )


async def get_dashboard_summary(
    db: AsyncSession, user_id: str, today: date | None = None
) -> DashboardSummaryResponse:
    today = today or utc_today()
    return DashboardSummaryResponse(
        property_count=await property_crud.count_properties(db, user_id),
        tenant_count=await tenant_crud.count_tenants(db, user_id),
        payments=await payment_services.get_payment_metrics(db, user_id, today),
        expenses=await expense_services.get_expense_metrics(db, user_id, today),
    )
