"""Payment API routes."""

from uuid import UUID

from fastapi import APIRouter

from ...database import DBSession
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse, DeletedResponse
from . import services
from .schemas import (
    PaymentCreate,
    PaymentMetricsResponse,
    PaymentResponse,
    PaymentUpdate,
    PaymentWithDetailsResponse,
    RentStatusResponse,
)

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.get("", response_model=BaseResponse[list[PaymentWithDetailsResponse]])
async def list_payments(current_user: CurrentUser, db: DBSession):
    """Get payments with tenant, unit and property details, newest first."""
    payments = await services.get_payments_with_details(db, current_user.id)
    return BaseResponse(success=True, data=payments)


@router.get("/pending-overdue", response_model=BaseResponse[RentStatusResponse])
async def pending_and_overdue(current_user: CurrentUser, db: DBSession):
    status = await services.get_pending_and_overdue(db, current_user.id)
    return BaseResponse(success=True, data=status)


@router.get("/metrics", response_model=BaseResponse[PaymentMetricsResponse])
async def payment_metrics(current_user: CurrentUser, db: DBSession):
    metrics = await services.get_payment_metrics(db, current_user.id)
    return BaseResponse(success=True, data=metrics)


@router.get("/{payment_id}", response_model=BaseResponse[PaymentWithDetailsResponse])
async def get_payment(payment_id: UUID, current_user: CurrentUser, db: DBSession):
    payment = await services.get_payment(db, current_user.id, payment_id)
    return BaseResponse(success=True, data=payment)


@router.post("", response_model=BaseResponse[PaymentResponse])
async def create_payment(
    data: PaymentCreate, current_user: CurrentUser, db: DBSession
):
    payment = await services.create_payment(db, current_user.id, data)
    return BaseResponse(
        success=True,
        message="Payment recorded successfully",
        data=PaymentResponse.model_validate(payment),
    )


@router.put("/{payment_id}", response_model=BaseResponse[PaymentResponse])
async def update_payment(
    payment_id: UUID, data: PaymentUpdate, current_user: CurrentUser, db: DBSession
):
    payment = await services.update_payment(db, current_user.id, payment_id, data)
    return BaseResponse(
        success=True,
        message="Payment updated successfully",
        data=PaymentResponse.model_validate(payment),
    )


@router.delete("/{payment_id}", response_model=BaseResponse[DeletedResponse])
async def delete_payment(payment_id: UUID, current_user: CurrentUser, db: DBSession):
    await services.delete_payment(db, current_user.id, payment_id)
    return BaseResponse(
        success=True,
        message="Payment deleted successfully",
        data=DeletedResponse(id=payment_id),
    )
