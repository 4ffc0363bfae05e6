"""User model.

Users are created from the identity asserted by the bearer token; the
primary key is the subject issued by the identity provider.
"""

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from ...database import Base, TimestampMixin


class User(TimestampMixin, Base):
    """Application user account."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (Index("ix_users_email", "email", unique=True),)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
