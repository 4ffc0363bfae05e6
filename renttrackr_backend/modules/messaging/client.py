"""Twilio WhatsApp client over the Twilio REST API."""

import asyncio
from typing import Any

import aiohttp

from ...config import settings
from ...core.exceptions import ExternalServiceError
from ...core.logging import get_logger

logger = get_logger(__name__)

SERVICE_NAME = "Twilio"
WHATSAPP_PREFIX = "whatsapp:"


class TwilioWhatsAppClient:
    """Sends WhatsApp messages through Twilio's Messages resource."""

    def __init__(
        self,
        account_sid: str | None,
        auth_token: str | None,
        from_number: str,
        api_url: str,
        timeout_seconds: int = 15,
    ):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.api_url = api_url.rstrip("/")
        self.timeout_seconds = timeout_seconds

    @property
    def configured(self) -> bool:
        return bool(self.account_sid and self.auth_token)

    @property
    def messages_url(self) -> str:
        return f"{self.api_url}/Accounts/{self.account_sid}/Messages.json"

    @staticmethod
    def whatsapp_address(phone_number: str) -> str:
        if phone_number.startswith(WHATSAPP_PREFIX):
            return phone_number
        return f"{WHATSAPP_PREFIX}{phone_number}"

    async def send_message(self, to: str, body: str) -> dict[str, Any]:
        """Send ``body`` to ``to`` and return Twilio's message resource.

        Raises:
            ExternalServiceError: If credentials are missing, the request
                fails or Twilio answers with an error status.
        """
        if not self.configured:
            raise ExternalServiceError(
                SERVICE_NAME,
                "send_message",
                details={"error": "Twilio credentials are not configured"},
            )

        form = {
            "From": self.whatsapp_address(self.from_number),
            "To": self.whatsapp_address(to),
            "Body": body,
        }
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    self.messages_url,
                    data=form,
                    auth=aiohttp.BasicAuth(self.account_sid, self.auth_token),
                    timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
                ) as resp:
                    payload = await resp.json(content_type=None)
                    if resp.status >= 400:
                        logger.error(
                            "Twilio rejected message",
                            extra={
                                "status": resp.status,
                                "twilio_code": payload.get("code"),
                            },
                        )
                        raise ExternalServiceError(
                            SERVICE_NAME,
                            "send_message",
                            details={
                                "status": resp.status,
                                "error": payload.get("message"),
                            },
                        )
                    return payload
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.exception("Twilio request failed")
            raise ExternalServiceError(
                SERVICE_NAME, "send_message", details={"error": str(e)}
            ) from e


def get_whatsapp_client() -> TwilioWhatsAppClient:
    return TwilioWhatsAppClient(
        account_sid=settings.twilio_account_sid,
        auth_token=settings.twilio_auth_token,
        from_number=settings.twilio_whatsapp_from,
        api_url=settings.twilio_api_url,
        timeout_seconds=settings.twilio_timeout_seconds,
    )
