"""Common utilities for the RentTrackr backend."""

import calendar
from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Get current UTC date."""
    return utc_now().date()


def ensure_aware(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes read back from the database."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def add_months(value: date, months: int) -> date:
    """Shift a date by whole months, clamping the day to the month's end."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def months_between(start: date, end: date) -> int:
    """Number of calendar months from start's month to end's month."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def format_money(amount: float | None) -> str:
    """Format an amount as dollars with two decimals."""
    return f"${(amount or 0):.2f}"
