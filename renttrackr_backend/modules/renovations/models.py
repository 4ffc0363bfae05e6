"""Renovation project and line item models."""

import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ...core.database_types import UUID as UUID_DB
from ...core.database_types import Money
from ...database import Base, TimestampMixin, UUIDPrimaryKey


class Renovation(UUIDPrimaryKey, TimestampMixin, Base):
    """Renovation project on a property, optionally scoped to one unit."""

    __tablename__ = "renovations"

    property_id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(), ForeignKey("properties.id", ondelete="CASCADE"), nullable=False
    )
    unit_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID_DB(), ForeignKey("units.id", ondelete="CASCADE"), nullable=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    total_cost: Mapped[float] = mapped_column(Money(), nullable=False, default=0)
    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    items: Mapped[list["RenovationItem"]] = relationship(
        "RenovationItem",
        back_populates="renovation",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="RenovationItem.created_at",
    )

    __table_args__ = (Index("ix_renovations_property", "property_id"),)

    def __repr__(self) -> str:
        return f"<Renovation(id={self.id}, title={self.title})>"


class RenovationItem(UUIDPrimaryKey, TimestampMixin, Base):
    """Purchased material or service line within a renovation."""

    __tablename__ = "renovation_items"

    renovation_id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(), ForeignKey("renovations.id", ondelete="CASCADE"), nullable=False
    )
    category: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    vendor: Mapped[str | None] = mapped_column(String(255), nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    unit_cost: Mapped[float | None] = mapped_column(Money(), nullable=True)
    total_cost: Mapped[float | None] = mapped_column(Money(), nullable=True)
    purchase_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    renovation: Mapped["Renovation"] = relationship(
        "Renovation", back_populates="items"
    )

    __table_args__ = (Index("ix_renovation_items_renovation", "renovation_id"),)

    def __repr__(self) -> str:
        return f"<RenovationItem(id={self.id}, category={self.category})>"
