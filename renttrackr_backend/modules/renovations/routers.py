"""Renovation API routes."""

from uuid import UUID

from fastapi import APIRouter

from ...database import DBSession
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse, DeletedResponse
from . import services
from .schemas import (
    RenovationCreate,
    RenovationItemCreate,
    RenovationItemResponse,
    RenovationItemUpdate,
    RenovationMetricsResponse,
    RenovationResponse,
    RenovationUpdate,
    RenovationWithDetailsResponse,
    RenovationWithItemsResponse,
)

router = APIRouter(prefix="/renovations", tags=["Renovations"])


# ----- Renovations -----


@router.get("", response_model=BaseResponse[list[RenovationWithDetailsResponse]])
async def list_renovations(current_user: CurrentUser, db: DBSession):
    """Get renovations with property, unit and item count."""
    renovations = await services.get_renovations_with_details(db, current_user.id)
    return BaseResponse(success=True, data=renovations)


@router.get("/metrics", response_model=BaseResponse[RenovationMetricsResponse])
async def renovation_metrics(current_user: CurrentUser, db: DBSession):
    metrics = await services.get_renovation_metrics(db, current_user.id)
    return BaseResponse(success=True, data=metrics)


@router.get(
    "/{renovation_id}", response_model=BaseResponse[RenovationWithItemsResponse]
)
async def get_renovation(renovation_id: UUID, current_user: CurrentUser, db: DBSession):
    renovation = await services.get_renovation(db, current_user.id, renovation_id)
    return BaseResponse(
        success=True, data=RenovationWithItemsResponse.model_validate(renovation)
    )


@router.post("", response_model=BaseResponse[RenovationResponse])
async def create_renovation(
    data: RenovationCreate, current_user: CurrentUser, db: DBSession
):
    renovation = await services.create_renovation(db, current_user.id, data)
    return BaseResponse(
        success=True,
        message="Renovation created successfully",
        data=RenovationResponse.model_validate(renovation),
    )


@router.put("/{renovation_id}", response_model=BaseResponse[RenovationResponse])
async def update_renovation(
    renovation_id: UUID,
    data: RenovationUpdate,
    current_user: CurrentUser,
    db: DBSession,
):
    renovation = await services.update_renovation(
        db, current_user.id, renovation_id, data
    )
    return BaseResponse(
        success=True,
        message="Renovation updated successfully",
        data=RenovationResponse.model_validate(renovation),
    )


@router.delete("/{renovation_id}", response_model=BaseResponse[DeletedResponse])
async def delete_renovation(
    renovation_id: UUID, current_user: CurrentUser, db: DBSession
):
    await services.delete_renovation(db, current_user.id, renovation_id)
    return BaseResponse(
        success=True,
        message="Renovation deleted successfully",
        data=DeletedResponse(id=renovation_id),
    )


# ----- Items -----


@router.get(
    "/{renovation_id}/items",
    response_model=BaseResponse[list[RenovationItemResponse]],
)
async def list_items(renovation_id: UUID, current_user: CurrentUser, db: DBSession):
    items = await services.get_renovation_items(db, current_user.id, renovation_id)
    return BaseResponse(
        success=True,
        data=[RenovationItemResponse.model_validate(i) for i in items],
    )


@router.post(
    "/{renovation_id}/items", response_model=BaseResponse[RenovationItemResponse]
)
async def create_item(
    renovation_id: UUID,
    data: RenovationItemCreate,
    current_user: CurrentUser,
    db: DBSession,
):
    item = await services.create_renovation_item(
        db, current_user.id, renovation_id, data
    )
    return BaseResponse(
        success=True,
        message="Item added successfully",
        data=RenovationItemResponse.model_validate(item),
    )


@router.put("/items/{item_id}", response_model=BaseResponse[RenovationItemResponse])
async def update_item(
    item_id: UUID,
    data: RenovationItemUpdate,
    current_user: CurrentUser,
    db: DBSession,
):
    item = await services.update_renovation_item(db, current_user.id, item_id, data)
    return BaseResponse(
        success=True,
        message="Item updated successfully",
        data=RenovationItemResponse.model_validate(item),
    )


@router.delete("/items/{item_id}", response_model=BaseResponse[DeletedResponse])
async def delete_item(item_id: UUID, current_user: CurrentUser, db: DBSession):
    await services.delete_renovation_item(db, current_user.id, item_id)
    return BaseResponse(
        success=True,
        message="Item deleted successfully",
        data=DeletedResponse(id=item_id),
    )
