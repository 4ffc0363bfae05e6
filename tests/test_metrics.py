from datetime import date, timedelta
from types import SimpleNamespace
import uuid

from renttrackr_backend.modules.dashboard.schemas import TaskType, UpcomingTask
from renttrackr_backend.modules.dashboard.services import get_upcoming_tasks, sort_tasks
from renttrackr_backend.modules.expenses.services import calculate_expense_metrics
from renttrackr_backend.modules.onboarding.services import build_steps
from renttrackr_backend.modules.parking.models import ParkingPermitStatus
from renttrackr_backend.modules.parking.services import calculate_parking_metrics
from renttrackr_backend.modules.renovations import crud as renovation_crud
from renttrackr_backend.modules.renovations.services import (
    calculate_renovation_metrics,
    item_total,
)

from .conftest import add_rental, add_user

TODAY = date(2024, 6, 15)


def _expense(expense_type: str, amount: float, day: date):
    return SimpleNamespace(type=expense_type, amount=amount, date=day)


def test_expense_metrics_by_period_and_keyword():
    expenses = [
        _expense("Plumbing Repair", 200, date(2024, 6, 1)),
        _expense("HOA Association Fee", 150, date(2024, 2, 1)),
        _expense("Routine maintenance", 50.25, date(2024, 6, 10)),
        _expense("Insurance", 900, date(2023, 6, 1)),
    ]

    metrics = calculate_expense_metrics(expenses, TODAY)

    assert metrics.total_this_month == 250.25
    assert metrics.total_this_year == 400.25
    assert metrics.maintenance == 250.25
    assert metrics.association == 150


def test_renovation_metrics_by_progress():
    renovations = [
        SimpleNamespace(start_date=None, end_date=None, total_cost=100),
        SimpleNamespace(start_date=date(2024, 6, 1), end_date=None, total_cost=200),
        SimpleNamespace(
            start_date=date(2024, 5, 1), end_date=date(2024, 7, 1), total_cost=300
        ),
        SimpleNamespace(
            start_date=date(2024, 1, 1), end_date=date(2024, 2, 1), total_cost=None
        ),
    ]

    metrics = calculate_renovation_metrics(renovations, TODAY)

    assert metrics.pending == 1
    assert metrics.in_progress == 2
    assert metrics.completed == 1
    assert metrics.total_cost == 600


def test_item_total_defaults_quantity_to_one():
    assert item_total(None, 12.5) == 12.5
    assert item_total(3, 19.99) == 59.97
    assert item_total(2, None) is None


def test_parking_metrics_count_statuses():
    permits = [
        SimpleNamespace(status=ParkingPermitStatus.ACTIVE),
        SimpleNamespace(status=ParkingPermitStatus.ACTIVE),
        SimpleNamespace(status=ParkingPermitStatus.CANCELLED),
    ]

    metrics = calculate_parking_metrics(permits)

    assert metrics.total_permits == 3
    assert metrics.active_permits == 2
    assert metrics.cancelled_permits == 1


def _task(title: str, due: date | None) -> UpcomingTask:
    return UpcomingTask(
        id=uuid.uuid4(),
        type=TaskType.RENOVATION,
        title=title,
        description=title,
        due_date=due,
        priority="medium",
        status="pending",
    )


def test_tasks_sorted_by_due_date_with_undated_last():
    tasks = [
        _task("undated", None),
        _task("later", TODAY + timedelta(days=10)),
        _task("sooner", TODAY + timedelta(days=2)),
    ]

    ordered = sort_tasks(tasks, limit=2)

    assert [task.title for task in ordered] == ["sooner", "later"]
    assert [t.title for t in sort_tasks(tasks, 5)][-1] == "undated"


def test_onboarding_steps_follow_counts():
    steps = build_steps(1, 1, 0, 0)

    assert [step.key.value for step in steps] == ["owner", "property", "tenant", "lease"]
    assert [step.complete for step in steps] == [True, True, False, False]
    assert steps[3].cta_text == "Add Tenant First"


def test_onboarding_lease_step_links_first_tenant():
    tenant_id = uuid.uuid4()
    steps = build_steps(1, 1, 1, 0, first_tenant_id=tenant_id)
    assert steps[3].cta_href == f"/dashboard/tenants/{tenant_id}"
    assert steps[3].cta_text == "Add Lease"


async def test_undated_renovations_do_not_crowd_out_dated_ones(async_session):
    await add_user(async_session, "owner_1")
    property_obj, *_ = await add_rental(async_session, "owner_1")
    for index in range(5):
        await renovation_crud.create_renovation(
            async_session, property_obj.id, title=f"undated {index}"
        )
    await renovation_crud.create_renovation(
        async_session, property_obj.id, title="dated", start_date=date(2024, 6, 10)
    )
    await async_session.commit()

    tasks = await get_upcoming_tasks(
        async_session, "owner_1", limit=5, today=date(2024, 6, 1)
    )

    assert len(tasks) == 5
    assert tasks[0].title == "dated"
    assert tasks[0].status == "scheduled"
    assert all(task.due_date is None for task in tasks[1:])
