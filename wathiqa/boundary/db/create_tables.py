"""
Create database tables from ORM metadata.

Usage:
    python -m wathiqa.boundary.db.create_tables

Dependencies: sqlalchemy, wathiqa.boundary.db
System role: Schema bootstrap
"""

import asyncio
from sqlalchemy.ext.asyncio import AsyncEngine

from wathiqa.boundary.db.base import Base
from wathiqa.boundary.db.connection import get_async_engine
from wathiqa.boundary.db import models  # noqa: F401  (registers tables)
from wathiqa.observability.logger import configure_logging, get_logger

logger = get_logger(__name__)


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """Create every table registered on Base.metadata."""
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created", extra={"tables": sorted(Base.metadata.tables)})


if __name__ == "__main__":
    configure_logging()
    asyncio.run(create_tables())
