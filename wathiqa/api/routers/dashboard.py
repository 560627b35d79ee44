"""
Dashboard API endpoints.

Routes:
- GET /dashboard/stats - Archive counters
- GET /dashboard/recent-documents - Latest filed documents
- GET /dashboard/activity - The caller's own activity trail

Dependencies: wathiqa.application.services, wathiqa.models
System role: Archive statistics HTTP API
"""

from fastapi import APIRouter, Depends, Query

from wathiqa.api.deps.dependencies import (
    get_activity_service,
    get_document_service,
    require_capability,
)
from wathiqa.api.error_handling import handle_archive_errors
from wathiqa.application.services import ActivityService, DocumentService
from wathiqa.core.access import AccessSession
from wathiqa.models.document import DashboardStatsResponse, DocumentResponse
from wathiqa.models.user import ActivityResponse

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
@handle_archive_errors
async def get_stats(
    document_service: DocumentService = Depends(get_document_service),
) -> DashboardStatsResponse:
    """Counters for the archive dashboard."""
    return DashboardStatsResponse(**await document_service.get_dashboard_stats())


@router.get("/recent-documents", response_model=list[DocumentResponse])
@handle_archive_errors
async def get_recent_documents(
    limit: int = Query(10, ge=1, le=100),
    document_service: DocumentService = Depends(get_document_service),
) -> list[DocumentResponse]:
    documents = await document_service.get_recent_documents(limit=limit)
    return [DocumentResponse(**d) for d in documents]


@router.get("/activity", response_model=list[ActivityResponse])
@handle_archive_errors
async def get_my_activity(
    limit: int = Query(20, ge=1, le=100),
    session: AccessSession = Depends(require_capability()),
    activity_service: ActivityService = Depends(get_activity_service),
) -> list[ActivityResponse]:
    """Latest activity of the calling user, newest first."""
    entries = await activity_service.list_for_user(session.user_id, limit=limit)
    return [ActivityResponse(**e) for e in entries]
