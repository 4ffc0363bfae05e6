"""Dashboard summaries built from the other modules."""

from .routers import router

__all__ = ["router"]
