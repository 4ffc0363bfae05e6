"""Common schemas shared across all modules."""

from datetime import datetime
from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ...core.utils import utc_now

T = TypeVar("T")


class BaseResponse(BaseModel, Generic[T]):
    """Base response schema for API responses."""

    success: bool = Field(
        default=True, description="Whether the request was successful"
    )
    message: str | None = Field(default=None, description="Response message")
    data: T | None = Field(default=None, description="Response data")
    error: Any | None = Field(default=None, description="Error details if any")
    timestamp: datetime = Field(
        default_factory=utc_now, description="Response timestamp"
    )


class ORMModel(BaseModel):
    """Response schema read straight from ORM objects."""

    model_config = ConfigDict(from_attributes=True)


class TimestampedResponse(ORMModel):
    """Response fields every stored record has."""

    id: UUID
    created_at: datetime
    updated_at: datetime | None = None


class DeletedResponse(BaseModel):
    """Identifier of a deleted record."""

    id: UUID | str


class CountResponse(BaseModel):
    """Number of records visible to the caller."""

    count: int = 0
