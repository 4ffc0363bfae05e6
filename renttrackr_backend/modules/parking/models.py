"""Parking permit and permit activity models."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from ...core.database_types import UUID as UUID_DB
from ...core.utils import utc_now
from ...database import Base, TimestampMixin, UUIDPrimaryKey


class ParkingPermitStatus(str, enum.Enum):
    """Parking permit status values."""

    ACTIVE = "Active"
    CANCELLED = "Cancelled"


class ParkingPermit(UUIDPrimaryKey, TimestampMixin, Base):
    """Parking permit issued for a property, usually to one of its tenants."""

    __tablename__ = "parking_permits"

    property_id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(), ForeignKey("properties.id", ondelete="CASCADE"), nullable=False
    )
    tenant_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID_DB(), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=True
    )
    building: Mapped[str | None] = mapped_column(String(100), nullable=True)
    permit_number: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[ParkingPermitStatus] = mapped_column(
        Enum(ParkingPermitStatus),
        nullable=False,
        default=ParkingPermitStatus.ACTIVE,
    )
    vehicle_make: Mapped[str | None] = mapped_column(String(100), nullable=True)
    vehicle_model: Mapped[str | None] = mapped_column(String(100), nullable=True)
    vehicle_year: Mapped[str | None] = mapped_column(String(10), nullable=True)
    vehicle_color: Mapped[str | None] = mapped_column(String(50), nullable=True)
    license_plate: Mapped[str | None] = mapped_column(String(50), nullable=True)
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    issued_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )

    activities: Mapped[list["ParkingActivity"]] = relationship(
        "ParkingActivity",
        back_populates="permit",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_parking_permits_property", "property_id"),
        Index("ix_parking_permits_tenant", "tenant_id"),
        Index("ix_parking_permits_status", "status"),
    )

    def __repr__(self) -> str:
        return (
            f"<ParkingPermit(id={self.id}, permit_number={self.permit_number}, "
            f"status={self.status})>"
        )


class ParkingActivity(UUIDPrimaryKey, TimestampMixin, Base):
    """Free-text log entry on a permit (issued, towed, renewed, ...)."""

    __tablename__ = "parking_activity"

    parking_permit_id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(),
        ForeignKey("parking_permits.id", ondelete="CASCADE"),
        nullable=False,
    )
    note: Mapped[str] = mapped_column(Text, nullable=False)

    permit: Mapped["ParkingPermit"] = relationship(
        "ParkingPermit", back_populates="activities"
    )

    __table_args__ = (Index("ix_parking_activity_permit", "parking_permit_id"),)

    def __repr__(self) -> str:
        return f"<ParkingActivity(id={self.id}, permit={self.parking_permit_id})>"
