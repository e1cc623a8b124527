"""
FlyBook Backend: Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment is pointed at a throwaway SQLite file BEFORE any flybook
       import, so the settings singleton and the Database handle pick it up.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── sample_flight_data: kwargs for a Flight row
    ├── db_engine: connected engine with freshly created tables; disposed after
    ├── test_client: HTTPX AsyncClient bound to the FastAPI app (needs db_engine)
    └── flight_factory: POSTs flights through the API and returns their ids
"""

import os
import tempfile
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Must run before flybook.config is imported anywhere
_test_dir = tempfile.mkdtemp(prefix="flybook_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_dir}/flybook_test.db"
os.environ["DB_CREATE_TABLES"] = "true"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


# ══════════════════════════════════════════════════════════════════════════
# Unit-test Fixtures (no database)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_flight(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = flight
            result = await flight_service.get_flight(mock_db_session, str(flight.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_flight_data():
    """Keyword arguments for a fully populated Flight row."""
    return {
        "id": uuid4(),
        "from_": "Paris",
        "to": "London",
        "stops": "0",
        "cabin_class": "economy",
        "price": 300.0,
        "status": "Active",
        "created_at": datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc),
    }


# ══════════════════════════════════════════════════════════════════════════
# Integration Fixtures (SQLite through the real Database handle)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    Connected engine with an empty schema.

    The handle is disposed afterwards so the next test reconnects on its own
    event loop.
    """
    import flybook.models  # noqa: F401
    from flybook.database import Base, database

    engine = await database.connect()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await database.dispose()


@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from flybook.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def flight_factory(test_client):
    """
    Creates flights through POST /flights.

    Usage:
        flight_id = await flight_factory(**{"from": "Paris", "price": 99})
    """
    async def create(**overrides):
        payload = {
            "from": "Paris",
            "to": "London",
            "stops": "0",
            "class": "economy",
            "price": 300,
        }
        payload.update(overrides)
        response = await test_client.post("/flights", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["id"]

    return create
