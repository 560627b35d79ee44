"""
Database connection management.

Provides async SQLAlchemy engine, session factory, and FastAPI dependency
for database session injection.

Dependencies: sqlalchemy, wathiqa.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from wathiqa.configs import get_settings


def use_immediate_transactions(engine: AsyncEngine) -> AsyncEngine:
    """
    Make every SQLite transaction start with BEGIN IMMEDIATE.

    The write lock is taken up front, so concurrent writers wait on the
    busy timeout instead of failing with "database is locked" when two
    deferred transactions try to upgrade their read locks.

    Args:
        engine: Async engine on the sqlite+aiosqlite dialect

    Returns:
        AsyncEngine: The same engine, with listeners attached
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    PostgreSQL gets a sized connection pool with pre-ping; SQLite uses the
    driver defaults and a generous lock timeout so concurrent writers queue
    instead of failing.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Raises:
        ArgumentError: If database URL is invalid or engine creation fails

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    db_config = get_settings().database

    if db_config.is_sqlite:
        engine = create_async_engine(
            db_config.async_database_url,
            echo=db_config.echo_sql,
            connect_args={"timeout": db_config.pool_timeout},
        )
        return use_immediate_transactions(engine)

    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_session_factory() -> async_sessionmaker:
    """
    Create async session factory for database operations.

    Returns async_sessionmaker bound to engine with autoflush=False for
    explicit transaction control and predictable behavior.

    Returns:
        async_sessionmaker: Async session factory configured for manual transaction control

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection.

    Exit code runs after the response is sent, so it never commits. Write
    routes commit through ``commit_changes`` before responding; anything
    left uncommitted is rolled back when the session closes.

    Yields:
        AsyncSession: Async SQLAlchemy database session (scoped to request lifetime)

    Raises:
        SQLAlchemyError: Propagated from database operations
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
