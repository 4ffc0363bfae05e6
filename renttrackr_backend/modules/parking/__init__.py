"""Parking permits and their activity log."""

from .models import ParkingActivity, ParkingPermit, ParkingPermitStatus
from .routers import router

__all__ = ["ParkingActivity", "ParkingPermit", "ParkingPermitStatus", "router"]
