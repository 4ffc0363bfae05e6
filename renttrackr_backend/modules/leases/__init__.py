"""Leases between tenants and the properties they rent."""

from .models import Lease
from .routers import router

__all__ = ["Lease", "router"]
