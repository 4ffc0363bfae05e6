"""Expense business logic services."""

import uuid
from collections.abc import Iterable
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError, ValidationError
from ...core.logging import get_logger
from ...core.utils import utc_today
from ..access import services as access
from . import crud
from .models import Expense
from .schemas import (
    ExpenseCreate,
    ExpenseMetricsResponse,
    ExpenseUpdate,
    ExpenseWithPropertyResponse,
)

logger = get_logger(__name__)

MAINTENANCE_KEYWORDS = ("maintenance", "repair")
ASSOCIATION_KEYWORDS = ("association",)


def to_details(row: tuple) -> ExpenseWithPropertyResponse:
    expense, property_address = row
    response = ExpenseWithPropertyResponse.model_validate(expense)
    response.property_address = property_address
    return response


def type_matches(expense_type: str | None, keywords: Iterable[str]) -> bool:
    lowered = (expense_type or "").lower()
    return any(keyword in lowered for keyword in keywords)


def calculate_expense_metrics(
    expenses: Iterable[Expense], today: date
) -> ExpenseMetricsResponse:
    """Aggregate spending for the month and year containing ``today``."""
    metrics = ExpenseMetricsResponse()
    for expense in expenses:
        if expense.date.year != today.year:
            continue
        amount = expense.amount or 0
        metrics.total_this_year += amount
        if expense.date.month == today.month:
            metrics.total_this_month += amount
        if type_matches(expense.type, MAINTENANCE_KEYWORDS):
            metrics.maintenance += amount
        if type_matches(expense.type, ASSOCIATION_KEYWORDS):
            metrics.association += amount

    metrics.total_this_year = round(metrics.total_this_year, 2)
    metrics.total_this_month = round(metrics.total_this_month, 2)
    metrics.maintenance = round(metrics.maintenance, 2)
    metrics.association = round(metrics.association, 2)
    return metrics


async def get_expenses_with_property_info(
    db: AsyncSession, user_id: str, limit: int | None = None
) -> list[ExpenseWithPropertyResponse]:
    rows = await crud.get_expenses_with_property(db, user_id, limit=limit)
    return [to_details(row) for row in rows]


async def get_expense(
    db: AsyncSession, user_id: str, expense_id: uuid.UUID
) -> ExpenseWithPropertyResponse:
    await access.ensure_expense_access(db, user_id, expense_id)
    row = await crud.get_expense_with_property(db, expense_id)
    if not row:
        raise NotFoundError("Expense not found")
    return to_details(row)


async def create_expense(
    db: AsyncSession, user_id: str, data: ExpenseCreate
) -> Expense:
    await access.ensure_property_access(db, user_id, data.property_id, write=True)

    expense = await crud.create_expense(
        db,
        data.property_id,
        type=data.type.strip(),
        amount=data.amount,
        date=data.date,
    )
    await db.commit()
    logger.info(
        "Expense created",
        extra={"expense_id": str(expense.id), "property_id": str(data.property_id)},
    )
    return expense


async def update_expense(
    db: AsyncSession, user_id: str, expense_id: uuid.UUID, data: ExpenseUpdate
) -> Expense:
    expense = await access.ensure_expense_access(db, user_id, expense_id, write=True)
    changes = data.model_dump(exclude_unset=True)

    for required in ("property_id", "type", "amount", "date"):
        if required in changes and changes[required] is None:
            raise ValidationError("Value cannot be empty", field=required)

    if "property_id" in changes and changes["property_id"] != expense.property_id:
        await access.ensure_property_access(
            db, user_id, changes["property_id"], write=True
        )

    updated = await crud.update_expense(db, expense, **changes)
    await db.commit()
    return updated


async def delete_expense(
    db: AsyncSession, user_id: str, expense_id: uuid.UUID
) -> None:
    expense = await access.ensure_expense_access(db, user_id, expense_id, write=True)
    await crud.delete_expense(db, expense)
    await db.commit()
    logger.info("Expense deleted", extra={"expense_id": str(expense_id)})


async def get_expense_metrics(
    db: AsyncSession, user_id: str, today: date | None = None
) -> ExpenseMetricsResponse:
    today = today or utc_today()
    expenses = await crud.get_expenses_between(
        db, user_id, date(today.year, 1, 1), date(today.year, 12, 31)
    )
    return calculate_expense_metrics(expenses, today)
