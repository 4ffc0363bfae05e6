import uuid
from datetime import date

from renttrackr_backend.core.utils import add_months, months_between
from renttrackr_backend.modules.leases.models import Lease
from renttrackr_backend.modules.payments.calculations import (
    calculate_rent_status,
    month_totals,
    rent_due_dates,
)
from renttrackr_backend.modules.payments.models import Payment


def _lease(start: date, end: date, rent: float = 1000) -> Lease:
    return Lease(
        id=uuid.uuid4(), tenant_id=uuid.uuid4(), start_date=start, end_date=end, rent=rent
    )


def _payment(lease: Lease, amount: float, day: date, late_fee: float | None = None):
    return Payment(lease_id=lease.id, amount=amount, date=day, late_fee=late_fee)


def test_add_months_clamps_to_month_end():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
    assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)


def test_months_between_counts_calendar_months():
    assert months_between(date(2024, 1, 31), date(2024, 2, 1)) == 1
    assert months_between(date(2023, 12, 1), date(2024, 3, 1)) == 3


def test_rent_due_dates_stop_at_today():
    dues = rent_due_dates(date(2024, 1, 15), date(2024, 3, 14))
    assert dues == [date(2024, 1, 15), date(2024, 2, 15)]


def test_rent_status_splits_shortfalls_into_overdue():
    """Partial February payment and no March payment are both overdue."""
    lease = _lease(date(2024, 1, 15), date(2024, 12, 31))
    payments = [
        _payment(lease, 1000, date(2024, 1, 16)),
        _payment(lease, 400, date(2024, 2, 20)),
    ]
    row = (lease, "Jane Doe", "1A", uuid.uuid4(), "12 Oak St")

    status = calculate_rent_status([row], payments, date(2024, 3, 20))

    assert status.pending == []
    assert [entry.due_date for entry in status.overdue] == [
        date(2024, 2, 15),
        date(2024, 3, 15),
    ]
    assert status.overdue[0].amount == 600
    assert status.overdue[0].days_overdue == 34
    assert status.overdue[1].days_overdue == 5
    assert status.total_overdue == 1600
    assert status.overdue[0].tenant_name == "Jane Doe"


def test_rent_due_today_is_pending():
    lease = _lease(date(2024, 1, 10), date(2024, 12, 31))
    paid_january = _payment(lease, 1000, date(2024, 1, 10))
    row = (lease, None, None, None, None)

    status = calculate_rent_status([row], [paid_january], date(2024, 2, 10))

    assert len(status.pending) == 1
    assert status.pending[0].days_until_due == 0
    assert status.pending[0].unit_number == "Unknown"
    assert status.total_pending == 1000
    assert status.overdue == []


def test_inactive_leases_are_ignored():
    expired = _lease(date(2023, 1, 1), date(2023, 12, 31))
    row = (expired, "Old Tenant", "2B", None, "9 Elm St")

    status = calculate_rent_status([row], [], date(2024, 3, 1))

    assert status.pending == [] and status.overdue == []
    assert status.total_overdue == 0


def test_month_totals_include_late_fees():
    lease = _lease(date(2024, 1, 1), date(2024, 12, 31))
    payments = [
        _payment(lease, 1000, date(2024, 3, 1)),
        _payment(lease, 200.5, date(2024, 3, 20), late_fee=25),
        _payment(lease, 1000, date(2024, 4, 1)),
    ]
    assert month_totals(payments, 2024, 3) == (1200.5, 25)
