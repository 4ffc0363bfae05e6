"""Property and unit models.

A property is owned directly by the user who created it and may also be
shared with other users through owner entities (see ``modules.owners``).
A property holds units; single-family properties may have none and host
their tenant directly.
"""

import uuid

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ...core.database_types import UUID as UUID_DB
from ...core.database_types import Money
from ...database import Base, TimestampMixin, UUIDPrimaryKey


class Property(UUIDPrimaryKey, TimestampMixin, Base):
    """Rental property."""

    __tablename__ = "properties"

    user_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    property_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    units: Mapped[list["Unit"]] = relationship(
        "Unit",
        back_populates="property",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Unit.unit_number",
    )

    __table_args__ = (Index("ix_properties_user", "user_id"),)

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, address={self.address})>"


class Unit(UUIDPrimaryKey, TimestampMixin, Base):
    """Rentable unit within a property."""

    __tablename__ = "units"

    property_id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(), ForeignKey("properties.id", ondelete="CASCADE"), nullable=False
    )
    unit_number: Mapped[str] = mapped_column(String(50), nullable=False)
    rent_amount: Mapped[float] = mapped_column(Money(), nullable=False)

    property: Mapped["Property"] = relationship("Property", back_populates="units")

    __table_args__ = (
        Index("ix_units_property_number", "property_id", "unit_number", unique=True),
    )

    def __repr__(self) -> str:
        return f"<Unit(id={self.id}, unit_number={self.unit_number})>"
