"""Rent schedule arithmetic.

Rent falls due every month on the lease start's day of month. A month's
rent is settled by the payments dated in the same calendar month; any
shortfall is pending on its due day and overdue from the next day on.
"""

import uuid
from collections import defaultdict
from collections.abc import Iterable
from datetime import date

from ...core.utils import add_months, months_between
from .models import Payment
from .schemas import UNKNOWN, OverdueRent, PendingRent, RentStatusResponse


def rent_due_dates(start_date: date, today: date) -> list[date]:
    """Due dates from the lease start up to and including ``today``."""
    due_dates = []
    for offset in range(months_between(start_date, today) + 1):
        due = add_months(start_date, offset)
        if due > today:
            continue
        due_dates.append(due)
    return due_dates


def paid_by_month(
    payments: Iterable[Payment],
) -> dict[uuid.UUID, dict[tuple[int, int], float]]:
    """Sum payment amounts per lease and (year, month)."""
    totals: dict[uuid.UUID, dict[tuple[int, int], float]] = defaultdict(
        lambda: defaultdict(float)
    )
    for payment in payments:
        totals[payment.lease_id][(payment.date.year, payment.date.month)] += (
            payment.amount or 0
        )
    return totals


def calculate_rent_status(
    lease_rows: Iterable[tuple],
    payments: Iterable[Payment],
    today: date,
) -> RentStatusResponse:
    """Split unpaid rent of active leases into pending and overdue.

    Args:
        lease_rows: (lease, tenant name, unit number, property id, address)
        payments: Payments made against those leases
        today: Reference date

    Returns:
        Pending entries sorted by days until due, overdue entries sorted with
        the most overdue first, and their totals
    """
    paid = paid_by_month(payments)
    status = RentStatusResponse()

    for lease, tenant_name, unit_number, _property_id, address in lease_rows:
        if not lease.is_active_on(today):
            continue

        for due_date in rent_due_dates(lease.start_date, today):
            paid_for_month = paid[lease.id][(due_date.year, due_date.month)]
            if paid_for_month >= lease.rent:
                continue

            details = {
                "lease_id": lease.id,
                "tenant_name": tenant_name or UNKNOWN,
                "unit_number": unit_number or UNKNOWN,
                "property_address": address or UNKNOWN,
                "amount": round(lease.rent - paid_for_month, 2),
                "due_date": due_date,
            }
            days_past_due = (today - due_date).days
            if days_past_due > 0:
                status.overdue.append(OverdueRent(days_overdue=days_past_due, **details))
            else:
                status.pending.append(
                    PendingRent(days_until_due=abs(days_past_due), **details)
                )

    status.pending.sort(key=lambda entry: entry.days_until_due)
    status.overdue.sort(key=lambda entry: entry.days_overdue, reverse=True)
    status.total_pending = round(sum(entry.amount for entry in status.pending), 2)
    status.total_overdue = round(sum(entry.amount for entry in status.overdue), 2)
    return status


def month_totals(payments: Iterable[Payment], year: int, month: int) -> tuple[float, float]:
    """Amount collected and late fees for payments dated in one month."""
    collected = 0.0
    late_fees = 0.0
    for payment in payments:
        if payment.date.year == year and payment.date.month == month:
            collected += payment.amount or 0
            late_fees += payment.late_fee or 0
    return round(collected, 2), round(late_fees, 2)
