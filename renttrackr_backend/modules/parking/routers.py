"""Parking permit API routes."""

from uuid import UUID

from fastapi import APIRouter

from ...database import DBSession
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse, DeletedResponse
from . import services
from .schemas import (
    ParkingActivityCreate,
    ParkingActivityResponse,
    ParkingMetricsResponse,
    ParkingPermitCreate,
    ParkingPermitResponse,
    ParkingPermitUpdate,
    ParkingPermitWithDetailsResponse,
)

router = APIRouter(prefix="/parking", tags=["Parking"])


@router.get(
    "/permits", response_model=BaseResponse[list[ParkingPermitWithDetailsResponse]]
)
async def list_permits(current_user: CurrentUser, db: DBSession):
    """Get permits with property address and tenant name, latest issued first."""
    permits = await services.get_parking_permits_with_details(db, current_user.id)
    return BaseResponse(success=True, data=permits)


@router.get("/metrics", response_model=BaseResponse[ParkingMetricsResponse])
async def parking_metrics(current_user: CurrentUser, db: DBSession):
    metrics = await services.get_parking_metrics(db, current_user.id)
    return BaseResponse(success=True, data=metrics)


@router.get(
    "/permits/{permit_id}",
    response_model=BaseResponse[ParkingPermitWithDetailsResponse],
)
async def get_permit(permit_id: UUID, current_user: CurrentUser, db: DBSession):
    permit = await services.get_parking_permit(db, current_user.id, permit_id)
    return BaseResponse(success=True, data=permit)


@router.post("/permits", response_model=BaseResponse[ParkingPermitResponse])
async def create_permit(
    data: ParkingPermitCreate, current_user: CurrentUser, db: DBSession
):
    permit = await services.create_parking_permit(db, current_user.id, data)
    return BaseResponse(
        success=True,
        message="Parking permit created successfully",
        data=ParkingPermitResponse.model_validate(permit),
    )


@router.put("/permits/{permit_id}", response_model=BaseResponse[ParkingPermitResponse])
async def update_permit(
    permit_id: UUID,
    data: ParkingPermitUpdate,
    current_user: CurrentUser,
    db: DBSession,
):
    permit = await services.update_parking_permit(db, current_user.id, permit_id, data)
    return BaseResponse(
        success=True,
        message="Parking permit updated successfully",
        data=ParkingPermitResponse.model_validate(permit),
    )


@router.delete("/permits/{permit_id}", response_model=BaseResponse[DeletedResponse])
async def delete_permit(permit_id: UUID, current_user: CurrentUser, db: DBSession):
    await services.delete_parking_permit(db, current_user.id, permit_id)
    return BaseResponse(
        success=True,
        message="Parking permit deleted successfully",
        data=DeletedResponse(id=permit_id),
    )


@router.get(
    "/permits/{permit_id}/activity",
    response_model=BaseResponse[list[ParkingActivityResponse]],
)
async def list_activity(permit_id: UUID, current_user: CurrentUser, db: DBSession):
    activity = await services.get_parking_activity(db, current_user.id, permit_id)
    return BaseResponse(
        success=True,
        data=[ParkingActivityResponse.model_validate(a) for a in activity],
    )


@router.post(
    "/permits/{permit_id}/activity",
    response_model=BaseResponse[ParkingActivityResponse],
)
async def add_activity(
    permit_id: UUID,
    data: ParkingActivityCreate,
    current_user: CurrentUser,
    db: DBSession,
):
    activity = await services.add_parking_activity(db, current_user.id, permit_id, data)
    return BaseResponse(
        success=True,
        message="Activity added successfully",
        data=ParkingActivityResponse.model_validate(activity),
    )
