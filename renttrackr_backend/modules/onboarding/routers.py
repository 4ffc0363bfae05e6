"""Onboarding API routes."""

from fastapi import APIRouter

from ...database import DBSession
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse
from . import services
from .schemas import OnboardingStatusResponse

router = APIRouter(prefix="/onboarding", tags=["Onboarding"])


@router.get("/status", response_model=BaseResponse[OnboardingStatusResponse])
async def onboarding_status(current_user: CurrentUser, db: DBSession):
    """Get the caller's progress through the setup checklist."""
    status = await services.get_onboarding_status(db, current_user.id)
    return BaseResponse(success=True, data=status)
