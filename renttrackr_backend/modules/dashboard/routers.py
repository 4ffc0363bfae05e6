"""Dashboard API routes."""

from fastapi import APIRouter, Query

from ...database import DBSession
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse
from ..payments.schemas import PaymentWithDetailsResponse
from . import services
from .schemas import DashboardActivityResponse, DashboardSummaryResponse, UpcomingTask

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/summary", response_model=BaseResponse[DashboardSummaryResponse])
async def dashboard_summary(current_user: CurrentUser, db: DBSession):
    """Counts plus this month's payment and expense figures."""
    summary = await services.get_dashboard_summary(db, current_user.id)
    return BaseResponse(success=True, data=summary)


@router.get("/activity", response_model=BaseResponse[DashboardActivityResponse])
async def dashboard_activity(current_user: CurrentUser, db: DBSession):
    activity = await services.get_dashboard_activity(db, current_user.id)
    return BaseResponse(success=True, data=activity)


@router.get(
    "/recent-payments",
    response_model=BaseResponse[list[PaymentWithDetailsResponse]],
)
async def recent_payments(
    current_user: CurrentUser,
    db: DBSession,
    limit: int = Query(5, ge=1, le=50),
):
    payments = await services.get_recent_payments(db, current_user.id, limit)
    return BaseResponse(success=True, data=payments)


@router.get("/upcoming-tasks", response_model=BaseResponse[list[UpcomingTask]])
async def upcoming_tasks(
    current_user: CurrentUser,
    db: DBSession,
    limit: int = Query(5, ge=1, le=50),
):
    tasks = await services.get_upcoming_tasks(db, current_user.id, limit)
    return BaseResponse(success=True, data=tasks)
