"""Renovation schemas."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from ..commons import TimestampedResponse

# ----- Item Schemas -----


class RenovationItemCreate(BaseModel):
    """Line item; ``total_cost`` defaults to quantity times unit cost."""

    category: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    vendor: str | None = Field(None, max_length=255)
    quantity: int = Field(1, ge=1)
    unit_cost: float | None = Field(None, ge=0)
    total_cost: float | None = Field(None, ge=0)
    purchase_date: date | None = None
    notes: str | None = Field(None, max_length=1000)


class RenovationItemUpdate(BaseModel):
    category: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    vendor: str | None = Field(None, max_length=255)
    quantity: int | None = Field(None, ge=1)
    unit_cost: float | None = Field(None, ge=0)
    total_cost: float | None = Field(None, ge=0)
    purchase_date: date | None = None
    notes: str | None = Field(None, max_length=1000)


class RenovationItemResponse(TimestampedResponse):
    renovation_id: UUID
    category: str
    description: str | None = None
    vendor: str | None = None
    quantity: int
    unit_cost: float | None = None
    total_cost: float | None = None
    purchase_date: date | None = None
    notes: str | None = None


# ----- Renovation Schemas -----


class RenovationCreate(BaseModel):
    property_id: UUID
    unit_id: UUID | None = None
    title: str = Field(..., min_length=1, max_length=255)
    start_date: date | None = None
    end_date: date | None = None
    total_cost: float = Field(0, ge=0)
    notes: str | None = Field(None, max_length=1000)

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date must be after start date")
        return self


class RenovationUpdate(BaseModel):
    property_id: UUID | None = None
    unit_id: UUID | None = None
    title: str | None = Field(None, min_length=1, max_length=255)
    start_date: date | None = None
    end_date: date | None = None
    total_cost: float | None = Field(None, ge=0)
    notes: str | None = Field(None, max_length=1000)


class RenovationResponse(TimestampedResponse):
    property_id: UUID
    unit_id: UUID | None = None
    title: str
    start_date: date | None = None
    end_date: date | None = None
    total_cost: float = 0
    notes: str | None = None


class RenovationWithDetailsResponse(RenovationResponse):
    property_address: str = "Unknown"
    unit_number: str | None = None
    item_count: int = 0


class RenovationWithItemsResponse(RenovationResponse):
    items: list[RenovationItemResponse] = []


class RenovationMetricsResponse(BaseModel):
    """Counts by progress: no start date, running, or finished."""

    pending: int = 0
    in_progress: int = 0
    completed: int = 0
    total_cost: float = 0
