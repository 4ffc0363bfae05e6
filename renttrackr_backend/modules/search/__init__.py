"""Keyword and record search across the app."""

from .routers import router

__all__ = ["router"]
