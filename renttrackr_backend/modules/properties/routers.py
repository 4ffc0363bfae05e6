"""Property and unit API routes."""

from uuid import UUID

from fastapi import APIRouter

from ...database import DBSession
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse, CountResponse, DeletedResponse
from . import services
from .schemas import (
    PropertyCreate,
    PropertyResponse,
    PropertyUpdate,
    PropertyWithUnitsResponse,
    UnitCreate,
    UnitResponse,
    UnitUpdate,
)

router = APIRouter(prefix="/properties", tags=["Properties"])
units_router = APIRouter(prefix="/units", tags=["Units"])


# ----- Properties -----


@router.get("", response_model=BaseResponse[list[PropertyResponse]])
async def list_properties(current_user: CurrentUser, db: DBSession):
    """Get the caller's properties, newest first."""
    properties = await services.get_user_properties(db, current_user.id)
    return BaseResponse(
        success=True,
        data=[PropertyResponse.model_validate(p) for p in properties],
    )


@router.get("/count", response_model=BaseResponse[CountResponse])
async def count_properties(current_user: CurrentUser, db: DBSession):
    count = await services.get_property_count(db, current_user.id)
    return BaseResponse(success=True, data=CountResponse(count=count))


@router.get("/{property_id}", response_model=BaseResponse[PropertyWithUnitsResponse])
async def get_property(property_id: UUID, current_user: CurrentUser, db: DBSession):
    """Get a property by ID with its units."""
    property_obj = await services.get_property(db, current_user.id, property_id)
    return BaseResponse(
        success=True,
        data=PropertyWithUnitsResponse.model_validate(property_obj),
    )


@router.post("", response_model=BaseResponse[PropertyResponse])
async def create_property(
    data: PropertyCreate, current_user: CurrentUser, db: DBSession
):
    """Create a new property."""
    property_obj = await services.create_property(db, current_user.id, data)
    return BaseResponse(
        success=True,
        message="Property created successfully",
        data=PropertyResponse.model_validate(property_obj),
    )


@router.put("/{property_id}", response_model=BaseResponse[PropertyResponse])
async def update_property(
    property_id: UUID, data: PropertyUpdate, current_user: CurrentUser, db: DBSession
):
    """Update a property."""
    property_obj = await services.update_property(
        db, current_user.id, property_id, data
    )
    return BaseResponse(
        success=True,
        message="Property updated successfully",
        data=PropertyResponse.model_validate(property_obj),
    )


@router.delete("/{property_id}", response_model=BaseResponse[DeletedResponse])
async def delete_property(property_id: UUID, current_user: CurrentUser, db: DBSession):
    """Delete a property and everything attached to it."""
    await services.delete_property(db, current_user.id, property_id)
    return BaseResponse(
        success=True,
        message="Property deleted successfully",
        data=DeletedResponse(id=property_id),
    )


# ----- Units -----


@router.get("/{property_id}/units", response_model=BaseResponse[list[UnitResponse]])
async def list_units(property_id: UUID, current_user: CurrentUser, db: DBSession):
    units = await services.get_property_units(db, current_user.id, property_id)
    return BaseResponse(
        success=True, data=[UnitResponse.model_validate(u) for u in units]
    )


@router.post("/{property_id}/units", response_model=BaseResponse[UnitResponse])
async def create_unit(
    property_id: UUID, data: UnitCreate, current_user: CurrentUser, db: DBSession
):
    """Add a unit to a property."""
    unit = await services.create_unit(db, current_user.id, property_id, data)
    return BaseResponse(
        success=True,
        message="Unit created successfully",
        data=UnitResponse.model_validate(unit),
    )


@units_router.put("/{unit_id}", response_model=BaseResponse[UnitResponse])
async def update_unit(
    unit_id: UUID, data: UnitUpdate, current_user: CurrentUser, db: DBSession
):
    unit = await services.update_unit(db, current_user.id, unit_id, data)
    return BaseResponse(
        success=True,
        message="Unit updated successfully",
        data=UnitResponse.model_validate(unit),
    )


@units_router.delete("/{unit_id}", response_model=BaseResponse[DeletedResponse])
async def delete_unit(unit_id: UUID, current_user: CurrentUser, db: DBSession):
    await services.delete_unit(db, current_user.id, unit_id)
    return BaseResponse(
        success=True,
        message="Unit deleted successfully",
        data=DeletedResponse(id=unit_id),
    )
