"""Messaging schemas."""

import datetime
from uuid import UUID

from pydantic import BaseModel, Field

MAX_MESSAGE_LENGTH = 1600


class SendMessageRequest(BaseModel):
    to: str = Field(..., min_length=1, description="Recipient phone, e.g. +1234567890")
    message: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH)
    tenant_name: str | None = Field(None, max_length=255)
    locale: str = "en"


class PaymentReminderRequest(BaseModel):
    tenant_id: UUID
    amount: float = Field(..., gt=0)
    due_date: datetime.date
    locale: str = "en"


class LeaseRenewalReminderRequest(BaseModel):
    lease_id: UUID
    locale: str = "en"


class MessageResult(BaseModel):
    message_sid: str | None = None
    status: str | None = None
    to: str
