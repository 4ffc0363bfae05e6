"""Rent payment model."""

import datetime
import uuid

from sqlalchemy import Date, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from ...core.database_types import UUID as UUID_DB
from ...core.database_types import Money
from ...database import Base, TimestampMixin, UUIDPrimaryKey


class Payment(UUIDPrimaryKey, TimestampMixin, Base):
    """Payment received against a lease."""

    __tablename__ = "payments"

    lease_id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(), ForeignKey("leases.id", ondelete="CASCADE"), nullable=False
    )
    amount: Mapped[float] = mapped_column(Money(), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    late_fee: Mapped[float | None] = mapped_column(Money(), nullable=True)

    __table_args__ = (
        Index("ix_payments_lease", "lease_id"),
        Index("ix_payments_date", "date"),
    )

    def __repr__(self) -> str:
        return f"<Payment(id={self.id}, amount={self.amount}, date={self.date})>"
