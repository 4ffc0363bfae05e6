"""Owner entity models.

An Owner is the legal holder of properties (a person or an LLC). Users
reach an owner's properties through a role on the owner:

- ``UserOwner`` grants a user a role (admin, editor, viewer) on an owner
- ``PropertyOwner`` links an owner to a property with an ownership share
- ``Invitation`` is a single-use, expiring token that creates a UserOwner
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...core.database_types import UUID as UUID_DB
from ...database import Base, TimestampMixin, UUIDPrimaryKey


class OwnerType(str, enum.Enum):
    """Legal form of an owner."""

    INDIVIDUAL = "individual"
    LLC = "llc"


class OwnerRole(str, enum.Enum):
    """Role of a user on an owner."""

    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"


class InvitationStatus(str, enum.Enum):
    """Invitation lifecycle states."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"


class Owner(UUIDPrimaryKey, TimestampMixin, Base):
    """Individual or LLC holding property."""

    __tablename__ = "owners"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[OwnerType] = mapped_column(
        Enum(OwnerType), nullable=False, default=OwnerType.INDIVIDUAL
    )
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    tax_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Owner(id={self.id}, name={self.name}, type={self.type})>"


class UserOwner(UUIDPrimaryKey, TimestampMixin, Base):
    """Role-based link granting a user access to an owner's properties."""

    __tablename__ = "user_owners"

    user_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(), ForeignKey("owners.id", ondelete="CASCADE"), nullable=False
    )
    role: Mapped[OwnerRole] = mapped_column(
        Enum(OwnerRole), nullable=False, default=OwnerRole.VIEWER
    )

    __table_args__ = (
        Index("ix_user_owners_user_owner", "user_id", "owner_id", unique=True),
        Index("ix_user_owners_owner", "owner_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<UserOwner(user_id={self.user_id}, owner_id={self.owner_id}, "
            f"role={self.role})>"
        )


class PropertyOwner(UUIDPrimaryKey, TimestampMixin, Base):
    """Share of a property held by an owner."""

    __tablename__ = "property_owners"

    property_id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(), ForeignKey("properties.id", ondelete="CASCADE"), nullable=False
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(), ForeignKey("owners.id", ondelete="CASCADE"), nullable=False
    )
    ownership_percentage: Mapped[float] = mapped_column(
        Numeric(5, 2, asdecimal=False), nullable=False, default=100
    )

    __table_args__ = (
        Index(
            "ix_property_owners_property_owner", "property_id", "owner_id", unique=True
        ),
        Index("ix_property_owners_owner", "owner_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<PropertyOwner(property_id={self.property_id}, owner_id={self.owner_id}, "
            f"share={self.ownership_percentage})>"
        )


class Invitation(UUIDPrimaryKey, TimestampMixin, Base):
    """Pending grant of a role on an owner, redeemed by token."""

    __tablename__ = "invitations"

    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(), ForeignKey("owners.id", ondelete="CASCADE"), nullable=False
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[OwnerRole] = mapped_column(Enum(OwnerRole), nullable=False)
    invited_by: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    token: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[InvitationStatus] = mapped_column(
        Enum(InvitationStatus), nullable=False, default=InvitationStatus.PENDING
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    accepted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        Index("ix_invitations_token", "token", unique=True),
        Index("ix_invitations_owner_email", "owner_id", "email"),
    )

    def __repr__(self) -> str:
        return (
            f"<Invitation(id={self.id}, owner_id={self.owner_id}, email={self.email}, "
            f"status={self.status})>"
        )
