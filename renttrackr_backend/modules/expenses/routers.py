"""Expense API routes."""

from uuid import UUID

from fastapi import APIRouter

from ...database import DBSession
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse, DeletedResponse
from . import services
from .schemas import (
    ExpenseCreate,
    ExpenseMetricsResponse,
    ExpenseResponse,
    ExpenseUpdate,
    ExpenseWithPropertyResponse,
)

router = APIRouter(prefix="/expenses", tags=["Expenses"])


@router.get("", response_model=BaseResponse[list[ExpenseWithPropertyResponse]])
async def list_expenses(current_user: CurrentUser, db: DBSession):
    """Get expenses with their property address, newest first."""
    expenses = await services.get_expenses_with_property_info(db, current_user.id)
    return BaseResponse(success=True, data=expenses)


@router.get("/metrics", response_model=BaseResponse[ExpenseMetricsResponse])
async def expense_metrics(current_user: CurrentUser, db: DBSession):
    metrics = await services.get_expense_metrics(db, current_user.id)
    return BaseResponse(success=True, data=metrics)


@router.get("/{expense_id}", response_model=BaseResponse[ExpenseWithPropertyResponse])
async def get_expense(expense_id: UUID, current_user: CurrentUser, db: DBSession):
    expense = await services.get_expense(db, current_user.id, expense_id)
    return BaseResponse(success=True, data=expense)


@router.post("", response_model=BaseResponse[ExpenseResponse])
async def create_expense(
    data: ExpenseCreate, current_user: CurrentUser, db: DBSession
):
    expense = await services.create_expense(db, current_user.id, data)
    return BaseResponse(
        success=True,
        message="Expense created successfully",
        data=ExpenseResponse.model_validate(expense),
    )


@router.put("/{expense_id}", response_model=BaseResponse[ExpenseResponse])
async def update_expense(
    expense_id: UUID, data: ExpenseUpdate, current_user: CurrentUser, db: DBSession
):
    expense = await services.update_expense(db, current_user.id, expense_id, data)
    return BaseResponse(
        success=True,
        message="Expense updated successfully",
        data=ExpenseResponse.model_validate(expense),
    )


@router.delete("/{expense_id}", response_model=BaseResponse[DeletedResponse])
async def delete_expense(expense_id: UUID, current_user: CurrentUser, db: DBSession):
    await services.delete_expense(db, current_user.id, expense_id)
    return BaseResponse(
        success=True,
        message="Expense deleted successfully",
        data=DeletedResponse(id=expense_id),
    )
