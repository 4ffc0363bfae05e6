"""Lease API routes."""

from uuid import UUID

from fastapi import APIRouter

from ...database import DBSession
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse, DeletedResponse
from . import services
from .schemas import LeaseCreate, LeaseResponse, LeaseUpdate, LeaseWithTenantResponse

router = APIRouter(prefix="/leases", tags=["Leases"])


@router.get("", response_model=BaseResponse[list[LeaseWithTenantResponse]])
async def list_leases(
    current_user: CurrentUser, db: DBSession, tenant_id: UUID | None = None
):
    """Get leases with tenant info, optionally for one tenant."""
    if tenant_id is not None:
        leases = await services.get_leases_by_tenant_id(db, current_user.id, tenant_id)
    else:
        leases = await services.get_leases_with_tenant_info(db, current_user.id)
    return BaseResponse(success=True, data=leases)


@router.get("/{lease_id}", response_model=BaseResponse[LeaseWithTenantResponse])
async def get_lease(lease_id: UUID, current_user: CurrentUser, db: DBSession):
    lease = await services.get_lease(db, current_user.id, lease_id)
    return BaseResponse(success=True, data=lease)


@router.post("", response_model=BaseResponse[LeaseResponse])
async def create_lease(data: LeaseCreate, current_user: CurrentUser, db: DBSession):
    lease = await services.create_lease(db, current_user.id, data)
    return BaseResponse(
        success=True,
        message="Lease created successfully",
        data=LeaseResponse.model_validate(lease),
    )


@router.put("/{lease_id}", response_model=BaseResponse[LeaseResponse])
async def update_lease(
    lease_id: UUID, data: LeaseUpdate, current_user: CurrentUser, db: DBSession
):
    lease = await services.update_lease(db, current_user.id, lease_id, data)
    return BaseResponse(
        success=True,
        message="Lease updated successfully",
        data=LeaseResponse.model_validate(lease),
    )


@router.delete("/{lease_id}", response_model=BaseResponse[DeletedResponse])
async def delete_lease(lease_id: UUID, current_user: CurrentUser, db: DBSession):
    await services.delete_lease(db, current_user.id, lease_id)
    return BaseResponse(
        success=True,
        message="Lease deleted successfully",
        data=DeletedResponse(id=lease_id),
    )
