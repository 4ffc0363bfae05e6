"""Common schemas and utilities shared across modules."""

from .schemas import (
    BaseResponse,
    CountResponse,
    DeletedResponse,
    ORMModel,
    TimestampedResponse,
)

__all__ = [
    "BaseResponse",
    "CountResponse",
    "DeletedResponse",
    "ORMModel",
    "TimestampedResponse",
]
