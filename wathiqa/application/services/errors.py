"""
Store failure translation shared by services.

Dependencies: sqlalchemy, wathiqa.core.exceptions
System role: Map driver/ORM failures onto the transient ArchiveStoreError
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wathiqa.core.exceptions import ArchiveStoreError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def store_operation(operation: str, **context: Any) -> AsyncIterator[None]:
    """
    Re-raise SQLAlchemy failures inside the block as ArchiveStoreError.

    Domain exceptions pass through untouched.

    Args:
        operation: Name reported on the error and in the log line
        **context: Extra fields logged with the failure
    """
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(
            "Store operation failed",
            extra={"operation": operation, "error": str(e), **context},
        )
        raise ArchiveStoreError(
            f"Store failure during {operation}",
            operation=operation,
            details={key: str(val) for key, val in context.items()},
        ) from e


async def commit_changes(db: AsyncSession, operation: str, **context: Any) -> None:
    """
    Commit the unit of work, surfacing a failed commit as ArchiveStoreError.

    Write routes call this before building their response.

    Args:
        db: Session holding the pending changes
        operation: Name reported on the error and in the log line
        **context: Extra fields logged with the failure
    """
    async with store_operation(operation, **context):
        await db.commit()
