"""Setup checklist for new users."""

from .routers import router

__all__ = ["router"]
