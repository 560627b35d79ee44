"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory and file-backed SQLite databases, session mocks,
sample users and access sessions
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from wathiqa.boundary.db import models  # noqa: F401  registers tables
from wathiqa.boundary.db.base import Base
from wathiqa.boundary.db.connection import use_immediate_transactions
from wathiqa.core.access import AccessSession, Role, open_session


@pytest_asyncio.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def file_session_factory(tmp_path):
    """
    Session factory over a file-backed SQLite database.

    Each session gets its own connection, so concurrent tasks contend on
    the database lock like separate clients would.

    Yields:
        async_sessionmaker: Factory producing independent sessions
    """
    engine = use_immediate_transactions(
        create_async_engine(
            f"sqlite+aiosqlite:///{tmp_path / 'archive.db'}",
            connect_args={"timeout": 30},
        )
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed UTC instant for expiry arithmetic."""
    return datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def make_access_session(fixed_now):
    """
    Build AccessSessions for a role.

    Returns:
        Callable[[Role, bool], AccessSession]
    """

    def _make(role: Role = Role.ARCHIVIST, is_restricted: bool = False) -> AccessSession:
        return open_session(
            user_id=uuid.uuid4(),
            role=role,
            now=fixed_now,
            ttl=timedelta(hours=24),
            is_restricted=is_restricted,
            restriction_reason="locked by admin" if is_restricted else None,
        )

    return _make
