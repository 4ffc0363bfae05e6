"""Messaging API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from ...database import DBSession
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse
from . import services
from .client import TwilioWhatsAppClient, get_whatsapp_client
from .schemas import (
    LeaseRenewalReminderRequest,
    MessageResult,
    PaymentReminderRequest,
    SendMessageRequest,
)

router = APIRouter(prefix="/messages", tags=["Messages"])

WhatsAppClient = Annotated[TwilioWhatsAppClient, Depends(get_whatsapp_client)]

SENT = "Message sent successfully!"


@router.post("/whatsapp", response_model=BaseResponse[MessageResult])
async def send_whatsapp_message(
    data: SendMessageRequest, current_user: CurrentUser, client: WhatsAppClient
):
    result = await services.send_whatsapp_message(
        client, data.to, data.message, tenant_name=data.tenant_name, locale=data.locale
    )
    return BaseResponse(success=True, message=SENT, data=result)


@router.post("/payment-reminder", response_model=BaseResponse[MessageResult])
async def send_payment_reminder(
    data: PaymentReminderRequest,
    current_user: CurrentUser,
    db: DBSession,
    client: WhatsAppClient,
):
    result = await services.send_payment_reminder(
        db,
        client,
        current_user.id,
        data.tenant_id,
        data.amount,
        data.due_date,
        locale=data.locale,
    )
    return BaseResponse(success=True, message=SENT, data=result)


@router.post("/lease-renewal-reminder", response_model=BaseResponse[MessageResult])
async def send_lease_renewal_reminder(
    data: LeaseRenewalReminderRequest,
    current_user: CurrentUser,
    db: DBSession,
    client: WhatsAppClient,
):
    result = await services.send_lease_renewal_reminder(
        db, client, current_user.id, data.lease_id, locale=data.locale
    )
    return BaseResponse(success=True, message=SENT, data=result)
