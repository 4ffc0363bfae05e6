"""Tenant schemas."""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from ..commons import TimestampedResponse


class TenantCreate(BaseModel):
    """Schema for creating a tenant.

    ``unit_id`` is optional: a single-family property hosts its tenant
    directly.
    """

    property_id: UUID
    unit_id: UUID | None = None
    name: str = Field(..., min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=50)
    email: EmailStr | None = None


class TenantUpdate(BaseModel):
    property_id: UUID | None = None
    unit_id: UUID | None = None
    name: str | None = Field(None, min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=50)
    email: EmailStr | None = None


class TenantResponse(TimestampedResponse):
    property_id: UUID
    unit_id: UUID | None = None
    name: str
    phone: str | None = None
    email: str | None = None


class TenantWithDetailsResponse(TenantResponse):
    """Tenant with the unit and property it lives in."""

    unit_number: str | None = None
    property_address: str | None = None
