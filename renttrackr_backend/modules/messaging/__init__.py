"""WhatsApp messages to tenants."""

from .routers import router

__all__ = ["router"]
