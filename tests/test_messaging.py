from datetime import date

import pytest

from renttrackr_backend.core.exceptions import ExternalServiceError, ValidationError
from renttrackr_backend.modules.messaging import services
from renttrackr_backend.modules.messaging.client import TwilioWhatsAppClient


class FakeWhatsAppClient:
    """Records messages instead of calling Twilio."""

    def __init__(self):
        self.sent = []

    async def send_message(self, to: str, body: str) -> dict:
        self.sent.append((to, body))
        return {"sid": f"SM{len(self.sent)}", "status": "queued"}


def test_format_phone_number_assumes_us_without_plus():
    assert services.format_phone_number("(555) 123-4567") == "+15551234567"
    assert services.format_phone_number("+44 20 7946 0958") == "+442079460958"


def test_phone_validation():
    assert services.is_valid_phone_number("+15551234567")
    assert not services.is_valid_phone_number("+1555")
    assert not services.is_valid_phone_number("+05551234567")


def test_compose_message_wraps_named_tenant():
    body = services.compose_message("Rent is due.", tenant_name="Jane")
    assert body.startswith("Hello Jane,\n\nRent is due.\n\n")
    assert body.endswith("Best regards,\nRentTrackr Team")
    assert services.compose_message("Plain") == "Plain"


def test_unknown_locale_falls_back_to_english():
    text = services.payment_reminder_text(1200, date(2024, 3, 7), locale="xx")
    assert "$1200.00" in text
    assert "March 7, 2024" in text


async def test_send_whatsapp_message_normalizes_number():
    client = FakeWhatsAppClient()

    result = await services.send_whatsapp_message(client, "555-123-4567", "Hi", "Jane")

    assert result.to == "+15551234567"
    assert result.message_sid == "SM1"
    assert client.sent[0][1].startswith("Hello Jane,")


@pytest.mark.parametrize(
    ("to", "message", "error"),
    [
        ("", "Hi", "Phone number is required"),
        ("+15551234567", "", "Message is required"),
        ("+15551234567", "x" * 1601, "Message is too long"),
        ("12", "Hi", services.INVALID_PHONE_MESSAGE),
    ],
)
async def test_send_whatsapp_message_rejects_bad_input(to, message, error):
    with pytest.raises(ValidationError) as exc_info:
        await services.send_whatsapp_message(FakeWhatsAppClient(), to, message)
    assert exc_info.value.message == error


async def test_unconfigured_client_raises_external_service_error():
    client = TwilioWhatsAppClient(None, None, "whatsapp:+14155238886", "https://example.test")

    with pytest.raises(ExternalServiceError) as exc_info:
        await client.send_message("+15551234567", "Hi")
    assert exc_info.value.service_name == "Twilio"


def test_whatsapp_address_prefix_is_added_once():
    assert TwilioWhatsAppClient.whatsapp_address("+1555") == "whatsapp:+1555"
    assert TwilioWhatsAppClient.whatsapp_address("whatsapp:+1555") == "whatsapp:+1555"
