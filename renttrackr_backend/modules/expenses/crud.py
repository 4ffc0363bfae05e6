"""CRUD operations for expenses."""

import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..access import services as access
from ..properties.models import Property
from .models import Expense

ExpenseRow = tuple[Expense, str]


def details_query():
    return select(Expense, Property.address).join(
        Property, Property.id == Expense.property_id
    )


async def get_expenses(db: AsyncSession, user_id: str) -> list[Expense]:
    query = (
        select(Expense)
        .join(Property, Property.id == Expense.property_id)
        .where(access.property_scope(user_id))
        .order_by(Expense.date.desc())
    )
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_expenses_with_property(
    db: AsyncSession, user_id: str, limit: int | None = None
) -> list[ExpenseRow]:
    query = (
        details_query()
        .where(access.property_scope(user_id))
        .order_by(Expense.date.desc(), Expense.created_at.desc())
    )
    if limit is not None:
        query = query.limit(limit)
    result = await db.execute(query)
    return [tuple(row) for row in result.all()]


async def get_expense_with_property(
    db: AsyncSession, expense_id: uuid.UUID
) -> ExpenseRow | None:
    result = await db.execute(details_query().where(Expense.id == expense_id))
    row = result.first()
    return tuple(row) if row else None


async def get_expenses_between(
    db: AsyncSession, user_id: str, start: date, end: date
) -> list[Expense]:
    """Expenses dated within [start, end] on the user's properties."""
    query = (
        select(Expense)
        .join(Property, Property.id == Expense.property_id)
        .where(
            access.property_scope(user_id),
            Expense.date >= start,
            Expense.date <= end,
        )
        .order_by(Expense.date)
    )
    result = await db.execute(query)
    return list(result.scalars().all())


async def create_expense(db: AsyncSession, property_id: uuid.UUID, **fields) -> Expense:
    expense = Expense(property_id=property_id, **fields)
    db.add(expense)
    await db.flush()
    return expense


async def update_expense(db: AsyncSession, expense: Expense, **kwargs) -> Expense:
    for key, value in kwargs.items():
        if hasattr(expense, key):
            setattr(expense, key, value)
    await db.flush()
    return expense


async def delete_expense(db: AsyncSession, expense: Expense) -> None:
    await db.delete(expense)
    await db.flush()
