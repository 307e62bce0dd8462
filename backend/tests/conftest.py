"""
Notepad Backend — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (database, store, API client).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, so every test starts empty):
    ├── db_engine:        in-memory SQLite engine with the schema created
    ├── db_session:       AsyncSession bound to db_engine
    ├── store:            NoteStore over db_session
    ├── mock_db_session:  AsyncMock session for failure-path tests
    ├── test_client:      HTTPX AsyncClient; every request gets its own
    │                     session on db_engine, committed like production
    └── error_client:     same, but app exceptions become 500 responses
                          instead of propagating into the test
"""

import os
import tempfile

# Override settings BEFORE any notepad imports: the engine and app are built
# at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="notepad_test_"), "test.db"
)
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["AUTO_CREATE_SCHEMA"] = "false"
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from notepad.database import Base, get_db_session, register_sqlite_functions
from notepad.models.note import Note  # noqa: F401
from notepad.store import NoteStore


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    In-memory SQLite engine with the notepads table created.

    StaticPool keeps a single connection, so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    register_sqlite_functions(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(db_session: AsyncSession) -> NoteStore:
    return NoteStore(db_session)


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_db_failure(mock_db_session):
            mock_db_session.execute.side_effect = OperationalError(...)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# API Client Fixtures
# ══════════════════════════════════════════════════════════════════════════

def _override_session(session_factory):
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return override_get_db_session


@pytest_asyncio.fixture
async def test_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client talking to the FastAPI app through ASGITransport.

    Usage:
        async def test_stats(test_client):
            response = await test_client.get("/notepads/stats")
            assert response.status_code == 200
    """
    from notepad.main import app

    app.dependency_overrides[get_db_session] = _override_session(session_factory)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def error_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    Like test_client, but unhandled exceptions surface as the app's 500
    response instead of being re-raised into the test.
    """
    from notepad.main import app

    app.dependency_overrides[get_db_session] = _override_session(session_factory)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def shopping_list():
    return {"title": "Shopping List", "content": "Milk\nBread\nEggs"}
