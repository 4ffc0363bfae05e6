"""Financial metrics, reports and spreadsheet exports."""

from .routers import router

__all__ = ["router"]
