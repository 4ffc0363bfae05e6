"""WhatsApp messaging to tenants.

Only English message templates ship; any other locale falls back to them.
"""

import re
import uuid
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import settings
from ...core.exceptions import ValidationError
from ...core.logging import get_logger
from ...core.utils import format_money
from ..access import services as access
from .client import TwilioWhatsAppClient
from .schemas import MAX_MESSAGE_LENGTH, MessageResult

logger = get_logger(__name__)

PHONE_PATTERN = re.compile(r"^\+[1-9]\d{9,14}$")
INVALID_PHONE_MESSAGE = "Invalid phone number format. Please use format: +1234567890"
DEFAULT_LOCALE = "en"

TEMPLATES = {
    "en": {
        "greeting": "Hello {name},",
        "closing": "Best regards,\n{app_name} Team",
        "payment_reminder": (
            "This is a friendly reminder that your rent payment of {amount} is due "
            "on {due_date}. Please make your payment as soon as possible to avoid "
            "any late fees. Thank you!"
        ),
        "lease_renewal": (
            "Your lease is set to expire on {end_date}. Please contact us to discuss "
            "renewal options or schedule a move-out inspection. We'd love to have "
            "you stay!"
        ),
    },
}


def templates_for(locale: str | None) -> dict[str, str]:
    return TEMPLATES.get((locale or "").lower(), TEMPLATES[DEFAULT_LOCALE])


def format_phone_number(phone_number: str) -> str:
    """Strip everything but digits and ``+``; bare numbers are taken as US."""
    cleaned = re.sub(r"[^\d+]", "", phone_number)
    if not cleaned.startswith("+"):
        return f"+1{cleaned}"
    return cleaned


def is_valid_phone_number(phone_number: str) -> bool:
    return bool(PHONE_PATTERN.match(re.sub(r"[^\d+]", "", phone_number)))


def format_long_date(value: date) -> str:
    return f"{value:%B} {value.day}, {value.year}"


def compose_message(
    message: str, tenant_name: str | None = None, locale: str = DEFAULT_LOCALE
) -> str:
    """Wrap a message in a greeting and sign-off when the tenant is named."""
    if not tenant_name:
        return message
    templates = templates_for(locale)
    greeting = templates["greeting"].format(name=tenant_name)
    closing = templates["closing"].format(app_name=settings.app_name)
    return f"{greeting}\n\n{message}\n\n{closing}"


def payment_reminder_text(
    amount: float, due_date: date, locale: str = DEFAULT_LOCALE
) -> str:
    return templates_for(locale)["payment_reminder"].format(
        amount=format_money(amount), due_date=format_long_date(due_date)
    )


def lease_renewal_text(end_date: date, locale: str = DEFAULT_LOCALE) -> str:
    return templates_for(locale)["lease_renewal"].format(
        end_date=format_long_date(end_date)
    )


async def send_whatsapp_message(
    client: TwilioWhatsAppClient,
    to: str,
    message: str,
    tenant_name: str | None = None,
    locale: str = DEFAULT_LOCALE,
) -> MessageResult:
    """Validate, compose and send one WhatsApp message.

    Raises:
        ValidationError: If the phone number or message is unusable.
        ExternalServiceError: If Twilio cannot deliver the message.
    """
    if not to or not to.strip():
        raise ValidationError("Phone number is required")
    if not message:
        raise ValidationError("Message is required")
    if len(message) > MAX_MESSAGE_LENGTH:
        raise ValidationError("Message is too long")

    phone = format_phone_number(to)
    if not is_valid_phone_number(phone):
        raise ValidationError(INVALID_PHONE_MESSAGE)

    body = compose_message(message, tenant_name, locale)
    sent = await client.send_message(phone, body)
    logger.info(
        "WhatsApp message sent",
        extra={"message_sid": sent.get("sid"), "status": sent.get("status")},
    )
    return MessageResult(message_sid=sent.get("sid"), status=sent.get("status"), to=phone)


def _require_phone(phone: str | None) -> str:
    if not phone:
        raise ValidationError("Tenant has no phone number", field="phone")
    return phone


async def send_payment_reminder(
    db: AsyncSession,
    client: TwilioWhatsAppClient,
    user_id: str,
    tenant_id: uuid.UUID,
    amount: float,
    due_date: date,
    locale: str = DEFAULT_LOCALE,
) -> MessageResult:
    tenant = await access.ensure_tenant_access(db, user_id, tenant_id)
    return await send_whatsapp_message(
        client,
        _require_phone(tenant.phone),
        payment_reminder_text(amount, due_date, locale),
        tenant_name=tenant.name,
        locale=locale,
    )


async def send_lease_renewal_reminder(
    db: AsyncSession,
    client: TwilioWhatsAppClient,
    user_id: str,
    lease_id: uuid.UUID,
    locale: str = DEFAULT_LOCALE,
) -> MessageResult:
    lease = await access.ensure_lease_access(db, user_id, lease_id)
    tenant = await access.ensure_tenant_access(db, user_id, lease.tenant_id)
    return await send_whatsapp_message(
        client,
        _require_phone(tenant.phone),
        lease_renewal_text(lease.end_date, locale),
        tenant_name=tenant.name,
        locale=locale,
    )
