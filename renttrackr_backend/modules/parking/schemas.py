"""Parking permit schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ..commons import ORMModel, TimestampedResponse
from .models import ParkingPermitStatus


class ParkingPermitBase(BaseModel):
    building: str | None = Field(None, max_length=100)
    vehicle_make: str | None = Field(None, max_length=100)
    vehicle_model: str | None = Field(None, max_length=100)
    vehicle_year: str | None = Field(None, max_length=10)
    vehicle_color: str | None = Field(None, max_length=50)
    license_plate: str | None = Field(None, max_length=50)
    comments: str | None = None


class ParkingPermitCreate(ParkingPermitBase):
    property_id: UUID
    tenant_id: UUID | None = None
    permit_number: str = Field(..., min_length=1, max_length=100)
    status: ParkingPermitStatus = ParkingPermitStatus.ACTIVE


class ParkingPermitUpdate(ParkingPermitBase):
    permit_number: str | None = Field(None, min_length=1, max_length=100)
    status: ParkingPermitStatus | None = None


class ParkingPermitResponse(TimestampedResponse, ParkingPermitBase):
    property_id: UUID
    tenant_id: UUID | None = None
    permit_number: str
    status: ParkingPermitStatus
    issued_at: datetime


class ParkingPermitWithDetailsResponse(ParkingPermitResponse):
    property_address: str = "Unknown"
    tenant_name: str | None = None


class ParkingActivityCreate(BaseModel):
    note: str = Field(..., min_length=1, max_length=2000)


class ParkingActivityResponse(ORMModel):
    id: UUID
    parking_permit_id: UUID
    note: str
    created_at: datetime


class ParkingMetricsResponse(BaseModel):
    total_permits: int = 0
    active_permits: int = 0
    cancelled_permits: int = 0
    # Permits carry no expiry date
    expiring_soon: int = 0
