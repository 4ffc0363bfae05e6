"""
Domain errors raised by the service layer.

Every error knows the HTTP status it maps to; ``main.py`` renders it as the
standard ``{"success": false, ...}`` envelope. Ownership-chain misses are
reported as ``NotFoundError`` so callers cannot probe other users' records.
"""

from typing import Any


class RentTrackrException(Exception):
    """Base class for errors the API reports to the caller."""

    status_code: int = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(RentTrackrException):
    """The record does not exist or is not reachable from the acting user."""

    status_code = 404

    def __init__(
        self, message: str = "Resource not found", details: dict[str, Any] | None = None
    ):
        super().__init__(message, details)


class PermissionError(RentTrackrException):
    """The user reaches the record but their owner role is too weak."""

    status_code = 403

    def __init__(
        self, message: str = "Unauthorized", details: dict[str, Any] | None = None
    ):
        super().__init__(message, details)


class ValidationError(RentTrackrException):
    """Input that pydantic accepted but a business rule rejects."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        if field:
            message = f"Validation error for field '{field}': {message}"
        super().__init__(message, details)
        self.field = field


class BusinessLogicError(RentTrackrException):
    """A state rule was violated (last admin, used invitation, full shares)."""


class ResourceAlreadyExistsError(RentTrackrException):
    status_code = 409

    def __init__(self, resource_type: str, identifier: Any):
        super().__init__(f"{resource_type} '{identifier}' already exists")
        self.resource_type = resource_type
        self.identifier = identifier


class ExternalServiceError(RentTrackrException):
    """An outbound provider (Twilio) failed or is not configured."""

    status_code = 502

    def __init__(
        self,
        service_name: str,
        operation: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(f"{service_name} {operation} failed", details)
        self.service_name = service_name
        self.operation = operation
