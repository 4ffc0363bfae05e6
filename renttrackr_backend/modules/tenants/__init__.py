"""Tenants living in units or single-family properties."""

from .models import Tenant
from .routers import router

__all__ = ["Tenant", "router"]
