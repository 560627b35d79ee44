"""
Annotation ORM models.

Comments, recommendations and problem reports attached to documents.
All three cascade away with their document.

Dependencies: sqlalchemy, wathiqa.boundary.db.base, wathiqa.core.constants
System role: Secondary workflow persistence
"""

import uuid

from sqlalchemy import Boolean, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from wathiqa.boundary.db.base import Base, UUIDMixin, TimestampMixin
from wathiqa.core.constants import (
    CommentType,
    Priority,
    RecommendationStatus,
    ReportStatus,
    ReportType,
    Severity,
)


def _enum(enum_cls) -> Enum:
    return Enum(enum_cls, native_enum=False, values_callable=lambda e: [m.value for m in e])


class DocumentAnnotationMixin:
    """Owning document and author columns."""

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )


class CommentModel(Base, UUIDMixin, TimestampMixin, DocumentAnnotationMixin):
    """Comment on a document."""

    __tablename__ = "comments"

    content: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[CommentType] = mapped_column(
        _enum(CommentType), nullable=False, default=CommentType.GENERAL
    )
    is_resolved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class RecommendationModel(Base, UUIDMixin, TimestampMixin, DocumentAnnotationMixin):
    """Recommendation raised against a document."""

    __tablename__ = "recommendations"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[Priority] = mapped_column(
        _enum(Priority), nullable=False, default=Priority.MEDIUM
    )
    status: Mapped[RecommendationStatus] = mapped_column(
        _enum(RecommendationStatus),
        nullable=False,
        default=RecommendationStatus.PENDING,
        index=True,
    )


class ProblemReportModel(Base, UUIDMixin, TimestampMixin, DocumentAnnotationMixin):
    """Problem report filed against a document."""

    __tablename__ = "reports"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[ReportType] = mapped_column(
        _enum(ReportType), nullable=False, default=ReportType.ERROR
    )
    severity: Mapped[Severity] = mapped_column(
        _enum(Severity), nullable=False, default=Severity.MEDIUM
    )
    status: Mapped[ReportStatus] = mapped_column(
        _enum(ReportStatus),
        nullable=False,
        default=ReportStatus.OPEN,
        index=True,
    )
