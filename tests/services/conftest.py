"""Service test fixtures — async DB, controllable clock, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database (one empty profile)
    - get_db and get_clock dependencies overridden; routes never see the wall clock
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares one connection, so
      data written by one request is visible to the next
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from shipyard.api.dependencies import get_clock
from shipyard.db.base import Base
from shipyard.infrastructure.database import get_db, DatabaseSessionManager
import shipyard.infrastructure.database as db_module
from shipyard.main import app

from tests.services.api_helpers import ADMIN_EMAIL, START, FakeClock, register_user


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return FakeClock(START)


@pytest.fixture
async def client(test_engine, test_session_factory, clock):
    """FastAPI test client with DB and clock dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock

    # Patch db_manager for the readiness probe
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seller(client):
    return await register_user(client, "Ada Shipwright", "ada#1234", "ada@example.com")


@pytest.fixture
async def buyer(client, seller):
    """Registered after the seller, so the buyer is the logged-in user."""
    return await register_user(client, "Bo Trader", "bo#5678", "bo@example.com")


@pytest.fixture
async def admin(client):
    return await register_user(client, "Harbor Master", "harbor#0001", ADMIN_EMAIL)
