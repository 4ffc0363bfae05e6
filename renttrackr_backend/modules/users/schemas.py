"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from ..commons import ORMModel


class UserCreate(BaseModel):
    id: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    name: str | None = Field(None, max_length=255)


class UserUpdate(BaseModel):
    email: EmailStr | None = None
    name: str | None = Field(None, max_length=255)


class UserResponse(ORMModel):
    id: str
    email: str
    name: str | None = None
    created_at: datetime
    updated_at: datetime | None = None
