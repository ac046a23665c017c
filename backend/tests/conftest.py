"""
Aviary Backend: Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession for service/repository unit tests
    ├── sample_bird_data: Field values of a stored bird
    ├── db_engine: Async SQLite engine on a fresh file with the schema created
    ├── session_factory: async_sessionmaker bound to db_engine
    └── test_client: HTTPX AsyncClient whose requests use the db_engine database
"""

import os
import tempfile
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

# Settings are read at import time: override them BEFORE any aviary import
os.environ["DATABASE_URL"] = (
    f"sqlite+aiosqlite:///{tempfile.mkdtemp(prefix='aviary_test_')}/aviary.db"
)
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["REQUIRED_BIRD_FIELDS"] = ""

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from aviary.database import Base, get_db_session  # noqa: E402
from aviary.models.bird import BirdRecord  # noqa: E402,F401


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_find(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = record
            bird = await BirdRepository(mock_db_session).find_by_id(1)
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
def sample_bird_data():
    created = datetime(2026, 10, 18, 9, 30, 0, tzinfo=timezone.utc)
    return {
        "id": 1,
        "name": "Monk Parakeet",
        "species": "Myiopsitta monachus",
        "created_at": created,
        "updated_at": created,
    }


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """A fresh SQLite database per test, so ids always start at 1."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'birds.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport to route requests directly to the app, with
    get_db_session overridden to open sessions on the per-test database.
    """
    from aviary.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
