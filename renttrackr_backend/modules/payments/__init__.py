"""Rent payments and outstanding rent."""

from .models import Payment
from .routers import router

__all__ = ["Payment", "router"]
