"""
Annotation API endpoints.

Routes:
- POST/GET /comments, PUT /comments/{id}/resolve, DELETE /comments/{id}
- POST/GET /recommendations, PUT /recommendations/{id}/status, DELETE /recommendations/{id}
- POST/GET /reports, PUT /reports/{id}/status, DELETE /reports/{id}

Creating requires the annotate capability; status changes and deletes
require the review capability. Every write commits before responding.

Dependencies: wathiqa.application.services, wathiqa.models
System role: Comments, recommendations and problem reports HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from wathiqa.api.deps.dependencies import (
    get_comment_service,
    get_recommendation_service,
    get_report_service,
    require_capability,
)
from wathiqa.api.error_handling import handle_archive_errors
from wathiqa.application.services import (
    CommentService,
    ProblemReportService,
    RecommendationService,
    commit_changes,
)
from wathiqa.core.access import AccessSession
from wathiqa.core.constants import RecommendationStatus, ReportStatus
from wathiqa.models.annotation import (
    CommentResponse,
    CreateCommentRequest,
    CreateRecommendationRequest,
    CreateReportRequest,
    RecommendationResponse,
    ReportResponse,
    ResolveCommentRequest,
    UpdateRecommendationStatusRequest,
    UpdateReportStatusRequest,
)
from wathiqa.models.common import MessageResponse

comments_router = APIRouter(prefix="/comments", tags=["comments"])
recommendations_router = APIRouter(prefix="/recommendations", tags=["recommendations"])
reports_router = APIRouter(prefix="/reports", tags=["reports"])

annotate = require_capability("can_annotate")
review = require_capability("can_review")


# Comments

@comments_router.post("", response_model=CommentResponse, status_code=201)
@handle_archive_errors
async def create_comment(
    request: CreateCommentRequest,
    session: AccessSession = Depends(annotate),
    service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    comment = await service.create(
        request.document_id, session.user_id, content=request.content, type=request.type
    )
    await commit_changes(service.db, "create_comment")
    return CommentResponse(**comment)


@comments_router.get("", response_model=list[CommentResponse])
@handle_archive_errors
async def list_comments(
    document_id: UUID | None = None,
    limit: int = Query(100, ge=1),
    offset: int = Query(0, ge=0),
    service: CommentService = Depends(get_comment_service),
) -> list[CommentResponse]:
    comments = await service.list_annotations(document_id=document_id, limit=limit, offset=offset)
    return [CommentResponse(**c) for c in comments]


@comments_router.put("/{comment_id}/resolve", response_model=CommentResponse)
@handle_archive_errors
async def resolve_comment(
    comment_id: UUID,
    request: ResolveCommentRequest,
    _session: AccessSession = Depends(annotate),
    service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    comment = await service.set_resolved(comment_id, request.is_resolved)
    await commit_changes(service.db, "resolve_comment", comment_id=comment_id)
    return CommentResponse(**comment)


@comments_router.delete("/{comment_id}", response_model=MessageResponse)
@handle_archive_errors
async def delete_comment(
    comment_id: UUID,
    _session: AccessSession = Depends(review),
    service: CommentService = Depends(get_comment_service),
) -> MessageResponse:
    await service.delete(comment_id)
    await commit_changes(service.db, "delete_comment", comment_id=comment_id)
    return MessageResponse(message="Comment deleted")


# Recommendations

@recommendations_router.post("", response_model=RecommendationResponse, status_code=201)
@handle_archive_errors
async def create_recommendation(
    request: CreateRecommendationRequest,
    session: AccessSession = Depends(annotate),
    service: RecommendationService = Depends(get_recommendation_service),
) -> RecommendationResponse:
    recommendation = await service.create(
        request.document_id,
        session.user_id,
        title=request.title,
        description=request.description,
        priority=request.priority,
    )
    await commit_changes(service.db, "create_recommendation")
    return RecommendationResponse(**recommendation)


@recommendations_router.get("", response_model=list[RecommendationResponse])
@handle_archive_errors
async def list_recommendations(
    document_id: UUID | None = None,
    status: RecommendationStatus | None = None,
    limit: int = Query(100, ge=1),
    offset: int = Query(0, ge=0),
    service: RecommendationService = Depends(get_recommendation_service),
) -> list[RecommendationResponse]:
    rows = await service.list_annotations(
        document_id=document_id, status=status, limit=limit, offset=offset
    )
    return [RecommendationResponse(**r) for r in rows]


@recommendations_router.put("/{recommendation_id}/status", response_model=RecommendationResponse)
@handle_archive_errors
async def update_recommendation_status(
    recommendation_id: UUID,
    request: UpdateRecommendationStatusRequest,
    _session: AccessSession = Depends(review),
    service: RecommendationService = Depends(get_recommendation_service),
) -> RecommendationResponse:
    recommendation = await service.update_status(recommendation_id, request.status)
    await commit_changes(
        service.db, "update_recommendation_status", recommendation_id=recommendation_id
    )
    return RecommendationResponse(**recommendation)


@recommendations_router.delete("/{recommendation_id}", response_model=MessageResponse)
@handle_archive_errors
async def delete_recommendation(
    recommendation_id: UUID,
    _session: AccessSession = Depends(review),
    service: RecommendationService = Depends(get_recommendation_service),
) -> MessageResponse:
    await service.delete(recommendation_id)
    await commit_changes(
        service.db, "delete_recommendation", recommendation_id=recommendation_id
    )
    return MessageResponse(message="Recommendation deleted")


# Problem reports

@reports_router.post("", response_model=ReportResponse, status_code=201)
@handle_archive_errors
async def create_report(
    request: CreateReportRequest,
    session: AccessSession = Depends(annotate),
    service: ProblemReportService = Depends(get_report_service),
) -> ReportResponse:
    report = await service.create(
        request.document_id,
        session.user_id,
        title=request.title,
        description=request.description,
        type=request.type,
        severity=request.severity,
    )
    await commit_changes(service.db, "create_report")
    return ReportResponse(**report)


@reports_router.get("", response_model=list[ReportResponse])
@handle_archive_errors
async def list_reports(
    document_id: UUID | None = None,
    status: ReportStatus | None = None,
    limit: int = Query(100, ge=1),
    offset: int = Query(0, ge=0),
    service: ProblemReportService = Depends(get_report_service),
) -> list[ReportResponse]:
    rows = await service.list_annotations(
        document_id=document_id, status=status, limit=limit, offset=offset
    )
    return [ReportResponse(**r) for r in rows]


@reports_router.put("/{report_id}/status", response_model=ReportResponse)
@handle_archive_errors
async def update_report_status(
    report_id: UUID,
    request: UpdateReportStatusRequest,
    _session: AccessSession = Depends(review),
    service: ProblemReportService = Depends(get_report_service),
) -> ReportResponse:
    report = await service.update_status(report_id, request.status)
    await commit_changes(service.db, "update_report_status", report_id=report_id)
    return ReportResponse(**report)


@reports_router.delete("/{report_id}", response_model=MessageResponse)
@handle_archive_errors
async def delete_report(
    report_id: UUID,
    _session: AccessSession = Depends(review),
    service: ProblemReportService = Depends(get_report_service),
) -> MessageResponse:
    await service.delete(report_id)
    await commit_changes(service.db, "delete_report", report_id=report_id)
    return MessageResponse(message="Report deleted")
