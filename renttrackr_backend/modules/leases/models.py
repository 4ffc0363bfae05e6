"""Lease model."""

import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from ...core.database_types import UUID as UUID_DB
from ...core.database_types import Money
from ...database import Base, TimestampMixin, UUIDPrimaryKey


class Lease(UUIDPrimaryKey, TimestampMixin, Base):
    """Time-bounded rent agreement for a tenant.

    A tenant usually holds one active lease; this is not enforced.
    """

    __tablename__ = "leases"

    tenant_id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    rent: Mapped[float] = mapped_column(Money(), nullable=False)
    deposit: Mapped[float] = mapped_column(Money(), nullable=False, default=0)
    security_deposit: Mapped[float | None] = mapped_column(Money(), nullable=True)
    pet_deposit: Mapped[float | None] = mapped_column(Money(), nullable=True)

    __table_args__ = (
        Index("ix_leases_tenant", "tenant_id"),
        Index("ix_leases_end_date", "end_date"),
    )

    def is_active_on(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def __repr__(self) -> str:
        return f"<Lease(id={self.id}, tenant_id={self.tenant_id}, rent={self.rent})>"
