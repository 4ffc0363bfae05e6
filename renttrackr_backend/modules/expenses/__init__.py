"""Property expenses."""

from .models import Expense
from .routers import router

__all__ = ["Expense", "router"]
