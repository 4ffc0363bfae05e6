"""Property and unit schemas."""

from uuid import UUID

from pydantic import BaseModel, Field

from ..commons import TimestampedResponse

# ----- Unit Schemas -----


class UnitCreate(BaseModel):
    """Schema for adding a unit to a property."""

    unit_number: str = Field(..., min_length=1, max_length=50)
    rent_amount: float = Field(..., ge=0)


class UnitUpdate(BaseModel):
    unit_number: str | None = Field(None, min_length=1, max_length=50)
    rent_amount: float | None = Field(None, ge=0)


class UnitResponse(TimestampedResponse):
    property_id: UUID
    unit_number: str
    rent_amount: float


# ----- Property Schemas -----


class PropertyCreate(BaseModel):
    """Schema for creating a property.

    When ``owner_id`` is given the property is also linked to that owner
    with a 100% share.
    """

    address: str = Field(..., min_length=1, max_length=500)
    property_type: str | None = Field(None, max_length=100)
    notes: str | None = None
    owner_id: UUID | None = None


class PropertyUpdate(BaseModel):
    address: str | None = Field(None, min_length=1, max_length=500)
    property_type: str | None = Field(None, max_length=100)
    notes: str | None = None


class PropertyResponse(TimestampedResponse):
    user_id: str
    address: str
    property_type: str | None = None
    notes: str | None = None


class PropertyWithUnitsResponse(PropertyResponse):
    """Property response with units included."""

    units: list[UnitResponse] = []
