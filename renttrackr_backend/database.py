"""
Database configuration for the RentTrackr backend.

Data is scoped per user through the ownership chains in ``modules.access``,
not through the schema, so every table is a plain declarative model.
"""

import logging
import uuid
from collections.abc import AsyncIterator
from datetime import datetime
from typing import Annotated

from fastapi import Depends
from sqlalchemy import DateTime, event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column
from sqlalchemy.sql import func

from .config import settings
from .core.database_types import UUID as UUID_DB
from .core.utils import utc_now

logger = logging.getLogger(__name__)


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """Turn on FK enforcement so ON DELETE CASCADE works on SQLite."""

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str) -> AsyncEngine:
    """Create the async engine with driver specific options."""
    engine_kwargs = {"echo": settings.database_echo, "future": True}

    if database_url.startswith("mysql+asyncmy"):
        engine_kwargs.update(
            connect_args={
                "ssl": {
                    "ssl_check_hostname": settings.database_ssl_check_hostname,
                    "ssl_verify_cert": settings.database_ssl_verify_cert,
                    "ssl_verify_identity": settings.database_ssl_verify_identity,
                },
            },
            pool_pre_ping=True,
            pool_recycle=3600,
        )

    new_engine = create_async_engine(database_url, **engine_kwargs)
    if database_url.startswith("sqlite"):
        enable_sqlite_foreign_keys(new_engine)
    return new_engine


engine = build_engine(settings.database_url)

AsyncSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)

Base = declarative_base()


class UUIDPrimaryKey:
    """Mixin for models keyed by a random UUID."""

    id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(), primary_key=True, default=uuid.uuid4
    )


class TimestampMixin:
    """Mixin to add created and updated timestamps to models."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
        onupdate=utc_now,
    )


async def get_db() -> AsyncIterator[AsyncSession]:
    """Dependency to get database session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


DBSession = Annotated[AsyncSession, Depends(get_db)]


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Dependency for code that opens several sessions at once."""
    return AsyncSessionLocal


SessionFactory = Annotated[
    async_sessionmaker[AsyncSession], Depends(get_session_factory)
]


def import_all_models() -> None:
    """Register every model on ``Base.metadata``."""
    from .modules.expenses import models as expense_models  # noqa: F401
    from .modules.leases import models as lease_models  # noqa: F401
    from .modules.owners import models as owner_models  # noqa: F401
    from .modules.parking import models as parking_models  # noqa: F401
    from .modules.payments import models as payment_models  # noqa: F401
    from .modules.properties import models as property_models  # noqa: F401
    from .modules.renovations import models as renovation_models  # noqa: F401
    from .modules.tenants import models as tenant_models  # noqa: F401
    from .modules.users import models as user_models  # noqa: F401


async def init_db(target_engine: AsyncEngine | None = None) -> None:
    """Create all tables (development and tests; production uses alembic)."""
    import_all_models()

    async with (target_engine or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")
