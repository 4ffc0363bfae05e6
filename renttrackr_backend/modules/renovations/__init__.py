"""Renovation projects and their purchased items."""

from .models import Renovation, RenovationItem
from .routers import router

__all__ = ["Renovation", "RenovationItem", "router"]
