"""User profile API routes."""

from fastapi import APIRouter

from ...database import DBSession
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse, DeletedResponse
from . import services
from .schemas import UserResponse, UserUpdate

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=BaseResponse[UserResponse])
async def get_me(current_user: CurrentUser):
    """Get the caller's profile."""
    return BaseResponse(success=True, data=UserResponse.model_validate(current_user))


@router.put("/me", response_model=BaseResponse[UserResponse])
async def update_me(data: UserUpdate, current_user: CurrentUser, db: DBSession):
    """Update the caller's email or display name."""
    user = await services.update_user(db, current_user.id, data)
    return BaseResponse(
        success=True,
        message="User updated successfully",
        data=UserResponse.model_validate(user),
    )


@router.delete("/me", response_model=BaseResponse[DeletedResponse])
async def delete_me(current_user: CurrentUser, db: DBSession):
    """Delete the caller's account and everything they own directly."""
    await services.delete_user(db, current_user.id)
    return BaseResponse(
        success=True,
        message="User deleted successfully",
        data=DeletedResponse(id=current_user.id),
    )
