"""Expense model."""

import datetime
import uuid

from sqlalchemy import Date, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from ...core.database_types import UUID as UUID_DB
from ...core.database_types import Money
from ...database import Base, TimestampMixin, UUIDPrimaryKey


class Expense(UUIDPrimaryKey, TimestampMixin, Base):
    """Property expense; ``type`` is free text such as "Association Fee"."""

    __tablename__ = "expenses"

    property_id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(), ForeignKey("properties.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[str] = mapped_column(String(100), nullable=False)
    amount: Mapped[float] = mapped_column(Money(), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    __table_args__ = (
        Index("ix_expenses_property", "property_id"),
        Index("ix_expenses_date", "date"),
    )

    def __repr__(self) -> str:
        return f"<Expense(id={self.id}, type={self.type}, amount={self.amount})>"
