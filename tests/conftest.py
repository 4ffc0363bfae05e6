"""Shared fixtures: a fresh SQLite database per test and an API client."""

import os

os.environ.setdefault("CONFIG", "resources/config/test.yaml")

import uuid  # noqa: E402
from datetime import date  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker  # noqa: E402

from renttrackr_backend.database import (  # noqa: E402
    build_engine,
    get_db,
    get_session_factory,
    init_db,
)
from renttrackr_backend.main import app  # noqa: E402
from renttrackr_backend.modules.auth import create_access_token  # noqa: E402
from renttrackr_backend.modules.leases.models import Lease  # noqa: E402
from renttrackr_backend.modules.properties.models import Property, Unit  # noqa: E402
from renttrackr_backend.modules.tenants.models import Tenant  # noqa: E402
from renttrackr_backend.modules.users.models import User  # noqa: E402


@pytest.fixture
async def engine(tmp_path):
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    await init_db(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def async_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()


def auth_headers(user_id: str, email: str | None = None, name: str | None = None):
    token = create_access_token(user_id, email or f"{user_id}@example.com", name)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice():
    return auth_headers("user_alice", "alice@example.com", "Alice")


@pytest.fixture
def bob():
    return auth_headers("user_bob", "bob@example.com", "Bob")


async def add_user(session, user_id: str, name: str | None = None) -> User:
    user = User(id=user_id, email=f"{user_id}@example.com", name=name)
    session.add(user)
    await session.flush()
    return user


async def add_rental(
    session,
    user_id: str,
    address: str = "12 Oak St",
    unit_number: str | None = "1A",
    tenant_name: str = "Jane Doe",
    phone: str | None = "+15551234567",
    rent: float = 1000,
    start: date = date(2024, 1, 1),
    end: date = date(2024, 12, 31),
):
    """Property, optional unit, tenant and lease, flushed but not committed."""
    property_obj = Property(id=uuid.uuid4(), user_id=user_id, address=address)
    session.add(property_obj)
    await session.flush()

    unit = None
    if unit_number is not None:
        unit = Unit(
            id=uuid.uuid4(),
            property_id=property_obj.id,
            unit_number=unit_number,
            rent_amount=rent,
        )
        session.add(unit)
        await session.flush()

    tenant = Tenant(
        id=uuid.uuid4(),
        property_id=property_obj.id,
        unit_id=unit.id if unit else None,
        name=tenant_name,
        phone=phone,
        email="jane@example.com",
    )
    session.add(tenant)
    await session.flush()

    lease = Lease(
        id=uuid.uuid4(),
        tenant_id=tenant.id,
        start_date=start,
        end_date=end,
        rent=rent,
        deposit=0,
    )
    session.add(lease)
    await session.flush()
    return property_obj, unit, tenant, lease
