"""
Dependency injection container.

Factory functions for FastAPI dependencies: services bound to the request
database session, and the caller's access session.

Dependencies: wathiqa.configs, wathiqa.application, wathiqa.boundary
System role: DI container for service injection
"""

import uuid
from datetime import datetime, timezone
from functools import lru_cache

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from wathiqa.api.error_handling import to_http_exception
from wathiqa.application.services import (
    ActivityService,
    AllocationService,
    BlockService,
    CommentService,
    DocumentService,
    FavoriteService,
    PaperService,
    ProblemReportService,
    RecommendationService,
    UserService,
)
from wathiqa.boundary.db import get_async_db
from wathiqa.configs import Settings, get_settings
from wathiqa.core.access import AccessSession, bind_presented_expiry, ensure_session_active
from wathiqa.core.exceptions import AccessDeniedError, ArchiveException


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_block_service(db: AsyncSession = Depends(get_async_db)) -> BlockService:
    """Block catalog bound to the request session."""
    return BlockService(db=db)


def get_allocation_service(db: AsyncSession = Depends(get_async_db)) -> AllocationService:
    """Address allocator bound to the request session."""
    return AllocationService(db=db)


def get_document_service(db: AsyncSession = Depends(get_async_db)) -> DocumentService:
    """Document binder bound to the request session."""
    return DocumentService(db=db)


def get_paper_service(db: AsyncSession = Depends(get_async_db)) -> PaperService:
    return PaperService(db=db)


def get_user_service(db: AsyncSession = Depends(get_async_db)) -> UserService:
    return UserService(db=db)


def get_comment_service(db: AsyncSession = Depends(get_async_db)) -> CommentService:
    return CommentService(db=db)


def get_recommendation_service(
    db: AsyncSession = Depends(get_async_db),
) -> RecommendationService:
    return RecommendationService(db=db)


def get_report_service(db: AsyncSession = Depends(get_async_db)) -> ProblemReportService:
    return ProblemReportService(db=db)


def get_favorite_service(db: AsyncSession = Depends(get_async_db)) -> FavoriteService:
    return FavoriteService(db=db)


def get_activity_service(db: AsyncSession = Depends(get_async_db)) -> ActivityService:
    return ActivityService(db=db)


def get_now() -> datetime:
    """Current UTC time; overridable in tests."""
    return datetime.now(timezone.utc)


async def get_access_session(
    x_user_id: str | None = Header(default=None),
    x_session_expires_at: datetime | None = Header(default=None),
    now: datetime = Depends(get_now),
    user_service: UserService = Depends(get_user_service),
) -> AccessSession:
    """
    Resolve the caller's access session.

    The identity gateway supplies ``X-User-ID``; ``X-Session-Expires-At``
    carries the expiry issued by ``POST /sessions``. The session is reopened
    at ``now``, so a presented expiry later than ``now + session TTL`` is
    rejected and expiry stays bounded by the server's TTL.

    Raises:
        HTTPException(401): Missing/invalid headers, expired or over-long session
        HTTPException(404): Unknown user
    """
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="X-User-ID header required")
    try:
        user_id = uuid.UUID(x_user_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="X-User-ID must be a UUID")
    if x_session_expires_at is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Session-Expires-At header required",
        )

    try:
        session = await user_service.open_session(user_id, now)
        session = bind_presented_expiry(session, x_session_expires_at)
        return ensure_session_active(session, now)
    except ArchiveException as e:
        raise to_http_exception(e) from e


def require_capability(capability: str | None = None):
    """
    Build a dependency that admits only unlocked sessions holding ``capability``.

    Args:
        capability: Capabilities field name, or None for any unlocked session

    Returns:
        Dependency callable yielding the AccessSession
    """

    async def dependency(session: AccessSession = Depends(get_access_session)) -> AccessSession:
        try:
            if session.is_locked:
                raise AccessDeniedError(
                    "active_account",
                    details={"reason": session.restriction_reason or "account locked"},
                )
            if capability is not None:
                session.require(capability)
        except AccessDeniedError as e:
            raise to_http_exception(e) from e
        return session

    return dependency
