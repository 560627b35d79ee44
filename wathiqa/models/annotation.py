"""
Annotation schemas.

Request/response schemas for comments, recommendations and problem reports.

Dependencies: pydantic, wathiqa.core.constants
System role: Annotation API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from wathiqa.core.constants import (
    CommentType,
    Priority,
    RecommendationStatus,
    ReportStatus,
    ReportType,
    Severity,
)


class AnnotationResponse(BaseModel):
    id: uuid.UUID
    document_id: uuid.UUID
    user_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class CreateCommentRequest(BaseModel):
    """Request schema for a comment."""

    document_id: uuid.UUID
    content: str = Field(..., min_length=1)
    type: CommentType = CommentType.GENERAL


class CommentResponse(AnnotationResponse):
    content: str
    type: CommentType
    is_resolved: bool


class ResolveCommentRequest(BaseModel):
    is_resolved: bool = True


class CreateRecommendationRequest(BaseModel):
    """Request schema for a recommendation."""

    document_id: uuid.UUID
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    priority: Priority = Priority.MEDIUM


class RecommendationResponse(AnnotationResponse):
    title: str
    description: str
    priority: Priority
    status: RecommendationStatus


class UpdateRecommendationStatusRequest(BaseModel):
    status: RecommendationStatus


class CreateReportRequest(BaseModel):
    """Request schema for a problem report."""

    document_id: uuid.UUID
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    type: ReportType = ReportType.ERROR
    severity: Severity = Severity.MEDIUM


class ReportResponse(AnnotationResponse):
    title: str
    description: str
    type: ReportType
    severity: Severity
    status: ReportStatus


class UpdateReportStatusRequest(BaseModel):
    status: ReportStatus
