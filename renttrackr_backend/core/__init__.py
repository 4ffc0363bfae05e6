"""Shared infrastructure: column types, domain errors and helpers."""

from .database_types import UUID, Money
from .exceptions import (
    BusinessLogicError,
    ExternalServiceError,
    NotFoundError,
    PermissionError,
    RentTrackrException,
    ResourceAlreadyExistsError,
    ValidationError,
)

__all__ = [
    "UUID",
    "Money",
    "RentTrackrException",
    "NotFoundError",
    "PermissionError",
    "ValidationError",
    "BusinessLogicError",
    "ResourceAlreadyExistsError",
    "ExternalServiceError",
]
