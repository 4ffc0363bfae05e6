"""Owner, team and invitation schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from ..commons import TimestampedResponse
from .models import InvitationStatus, OwnerRole, OwnerType

# ----- Owner Schemas -----


class OwnerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: OwnerType = OwnerType.INDIVIDUAL
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    tax_id: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=500)
    notes: str | None = None


class OwnerUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    type: OwnerType | None = None
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    tax_id: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=500)
    notes: str | None = None


class OwnerResponse(TimestampedResponse):
    name: str
    type: OwnerType
    email: str | None = None
    phone: str | None = None
    tax_id: str | None = None
    address: str | None = None
    notes: str | None = None


class OwnerWithRoleResponse(OwnerResponse):
    """Owner as seen by one of its users."""

    role: OwnerRole


# ----- Property Ownership Schemas -----


class PropertyOwnerCreate(BaseModel):
    property_id: UUID
    owner_id: UUID
    ownership_percentage: float = Field(100, gt=0, le=100)


class PropertyOwnerUpdate(BaseModel):
    ownership_percentage: float = Field(..., gt=0, le=100)


class PropertyOwnerResponse(TimestampedResponse):
    property_id: UUID
    owner_id: UUID
    ownership_percentage: float


class PropertyOwnerDetailResponse(OwnerResponse):
    """Owner of a property with its share."""

    ownership_percentage: float = 0
    property_owner_id: UUID


# ----- Team Schemas -----


class OwnerUserResponse(BaseModel):
    id: str
    email: str
    name: str | None = None
    role: OwnerRole
    user_owner_id: UUID


class RoleUpdate(BaseModel):
    role: OwnerRole


class UserOwnerResponse(TimestampedResponse):
    user_id: str
    owner_id: UUID
    role: OwnerRole


# ----- Invitation Schemas -----


class InvitationCreate(BaseModel):
    email: EmailStr
    role: OwnerRole = OwnerRole.VIEWER


class InvitationAccept(BaseModel):
    token: str = Field(..., min_length=1, max_length=64)


class InvitationResponse(TimestampedResponse):
    owner_id: UUID
    email: str
    role: OwnerRole
    invited_by: str
    token: str
    status: InvitationStatus
    expires_at: datetime
    accepted_at: datetime | None = None
    invite_url: str | None = None


# ----- Migration Schemas -----


class MigrationResultResponse(BaseModel):
    migrated_count: int = 0
    skipped_count: int = 0
    total_users: int = 0


class MigrationStatusResponse(BaseModel):
    total_properties: int = 0
    needs_migration: int = 0
    already_migrated: int = 0
