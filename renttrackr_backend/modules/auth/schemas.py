"""Authentication schemas."""

from pydantic import BaseModel


class AuthenticatedUser(BaseModel):
    """Identity asserted by a valid bearer token."""

    id: str
    email: str
    name: str | None = None
