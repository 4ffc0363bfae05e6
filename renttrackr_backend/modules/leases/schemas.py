"""Lease schemas."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from ..commons import TimestampedResponse


class LeaseFields(BaseModel):
    start_date: date
    end_date: date
    rent: float = Field(..., ge=0)
    deposit: float = Field(default=0, ge=0)
    security_deposit: float | None = Field(None, ge=0)
    pet_deposit: float | None = Field(None, ge=0)


class LeaseCreate(LeaseFields):
    tenant_id: UUID

    @field_validator("end_date")
    @classmethod
    def end_date_after_start(cls, v, info):
        if "start_date" in info.data and v < info.data["start_date"]:
            raise ValueError("End date must be after start date")
        return v


class LeaseUpdate(BaseModel):
    tenant_id: UUID | None = None
    start_date: date | None = None
    end_date: date | None = None
    rent: float | None = Field(None, ge=0)
    deposit: float | None = Field(None, ge=0)
    security_deposit: float | None = Field(None, ge=0)
    pet_deposit: float | None = Field(None, ge=0)


class LeaseResponse(TimestampedResponse, LeaseFields):
    tenant_id: UUID


class LeaseWithTenantResponse(LeaseResponse):
    """Lease with the tenant, unit and property it covers."""

    tenant_name: str | None = None
    unit_number: str | None = None
    property_id: UUID | None = None
    property_address: str | None = None
