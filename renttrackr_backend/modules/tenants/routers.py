"""Tenant API routes."""

from uuid import UUID

from fastapi import APIRouter

from ...database import DBSession
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse, CountResponse, DeletedResponse
from . import services
from .schemas import (
    TenantCreate,
    TenantResponse,
    TenantUpdate,
    TenantWithDetailsResponse,
)

router = APIRouter(prefix="/tenants", tags=["Tenants"])


@router.get("", response_model=BaseResponse[list[TenantWithDetailsResponse]])
async def list_tenants(current_user: CurrentUser, db: DBSession):
    """Get tenants across the caller's properties."""
    tenants = await services.get_user_tenants(db, current_user.id)
    return BaseResponse(success=True, data=tenants)


@router.get("/count", response_model=BaseResponse[CountResponse])
async def count_tenants(current_user: CurrentUser, db: DBSession):
    count = await services.get_tenant_count(db, current_user.id)
    return BaseResponse(success=True, data=CountResponse(count=count))


@router.get("/{tenant_id}", response_model=BaseResponse[TenantWithDetailsResponse])
async def get_tenant(tenant_id: UUID, current_user: CurrentUser, db: DBSession):
    tenant = await services.get_tenant(db, current_user.id, tenant_id)
    return BaseResponse(success=True, data=tenant)


@router.post("", response_model=BaseResponse[TenantResponse])
async def create_tenant(data: TenantCreate, current_user: CurrentUser, db: DBSession):
    tenant = await services.create_tenant(db, current_user.id, data)
    return BaseResponse(
        success=True,
        message="Tenant created successfully",
        data=TenantResponse.model_validate(tenant),
    )


@router.put("/{tenant_id}", response_model=BaseResponse[TenantResponse])
async def update_tenant(
    tenant_id: UUID, data: TenantUpdate, current_user: CurrentUser, db: DBSession
):
    tenant = await services.update_tenant(db, current_user.id, tenant_id, data)
    return BaseResponse(
        success=True,
        message="Tenant updated successfully",
        data=TenantResponse.model_validate(tenant),
    )


@router.delete("/{tenant_id}", response_model=BaseResponse[DeletedResponse])
async def delete_tenant(tenant_id: UUID, current_user: CurrentUser, db: DBSession):
    await services.delete_tenant(db, current_user.id, tenant_id)
    return BaseResponse(
        success=True,
        message="Tenant deleted successfully",
        data=DeletedResponse(id=tenant_id),
    )
