"""Properties and their units."""

from .models import Property, Unit
from .routers import router, units_router

__all__ = [
    # Models
    "Property",
    "Unit",
    # Routers
    "router",
    "units_router",
]
