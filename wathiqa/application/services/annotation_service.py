"""
Annotation services.

Comments, recommendations and problem reports all hang off a document and
an author. They share create/list/get/delete; recommendations and reports
also carry a reviewable status, comments a resolved flag.

Dependencies: wathiqa.boundary.db.CRUD, wathiqa.core.constants
System role: Secondary document workflows
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from wathiqa.application.services.errors import store_operation
from wathiqa.boundary.db.CRUD.annotation_crud import (
    AnnotationCRUD,
    comment_crud,
    recommendation_crud,
    report_crud,
)
from wathiqa.boundary.db.CRUD.document_crud import document_crud
from wathiqa.boundary.db.CRUD.user_crud import user_crud
from wathiqa.core.constants import (
    CommentType,
    Priority,
    RecommendationStatus,
    ReportStatus,
    ReportType,
    Severity,
)
from wathiqa.core.exceptions import (
    AnnotationNotFoundError,
    DocumentNotFoundError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


class AnnotationService:
    """Shared orchestration for document annotations."""

    kind = "annotation"
    fields: tuple[str, ...] = ()
    crud: AnnotationCRUD

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize annotation service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    def to_dict(self, row) -> dict[str, Any]:
        data = {
            "id": row.id,
            "document_id": row.document_id,
            "user_id": row.user_id,
            "created_at": row.created_at,
            "updated_at": row.updated_at,
        }
        for name in self.fields:
            value = getattr(row, name)
            data[name] = value.value if hasattr(value, "value") else value
        return data

    async def _create(self, document_id: UUID, user_id: UUID, **values) -> dict:
        async with store_operation(f"create_{self.kind}", document_id=document_id):
            if not await document_crud.exists(self.db, document_id):
                raise DocumentNotFoundError(document_id)
            if not await user_crud.exists(self.db, user_id):
                raise UserNotFoundError(user_id)
            row = await self.crud.create(
                self.db, document_id=document_id, user_id=user_id, **values
            )
        logger.info(
            f"{self.kind.capitalize()} created",
            extra={f"{self.kind}_id": str(row.id), "document_id": str(document_id)},
        )
        return self.to_dict(row)

    async def get(self, annotation_id: UUID) -> dict:
        """
        Get one annotation.

        Raises:
            AnnotationNotFoundError: No such row
        """
        async with store_operation(f"get_{self.kind}", annotation_id=annotation_id):
            row = await self.crud.get_by_id(self.db, annotation_id)
        if row is None:
            raise AnnotationNotFoundError(annotation_id)
        return self.to_dict(row)

    async def list_annotations(
        self,
        document_id: UUID | None = None,
        status: Any = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict]:
        """List annotations, newest first, optionally per document/status."""
        async with store_operation(f"list_{self.kind}s", document_id=document_id):
            rows = await self.crud.get_filtered(
                self.db, document_id=document_id, status=status, limit=limit, offset=offset
            )
        return [self.to_dict(r) for r in rows]

    async def _update(self, annotation_id: UUID, **values) -> dict:
        async with store_operation(f"update_{self.kind}", annotation_id=annotation_id):
            if not await self.crud.exists(self.db, annotation_id):
                raise AnnotationNotFoundError(annotation_id)
            row = await self.crud.update_by_id(self.db, annotation_id, **values)
        logger.info(
            f"{self.kind.capitalize()} updated",
            extra={f"{self.kind}_id": str(annotation_id), "updates": list(values)},
        )
        return self.to_dict(row)

    async def delete(self, annotation_id: UUID) -> bool:
        """
        Delete one annotation.

        Raises:
            AnnotationNotFoundError: No such row
        """
        async with store_operation(f"delete_{self.kind}", annotation_id=annotation_id):
            deleted = await self.crud.delete_by_id(self.db, annotation_id)
        if not deleted:
            raise AnnotationNotFoundError(annotation_id)
        logger.info(f"{self.kind.capitalize()} deleted", extra={f"{self.kind}_id": str(annotation_id)})
        return True


class CommentService(AnnotationService):
    """Comments on documents."""

    kind = "comment"
    fields = ("content", "type", "is_resolved")
    crud = comment_crud

    async def create(
        self,
        document_id: UUID,
        user_id: UUID,
        content: str,
        type: CommentType = CommentType.GENERAL,
    ) -> dict:
        return await self._create(
            document_id, user_id, content=content, type=CommentType(type), is_resolved=False
        )

    async def set_resolved(self, comment_id: UUID, is_resolved: bool = True) -> dict:
        return await self._update(comment_id, is_resolved=is_resolved)


class RecommendationService(AnnotationService):
    """Recommendations raised against documents."""

    kind = "recommendation"
    fields = ("title", "description", "priority", "status")
    crud = recommendation_crud

    async def create(
        self,
        document_id: UUID,
        user_id: UUID,
        title: str,
        description: str,
        priority: Priority = Priority.MEDIUM,
    ) -> dict:
        return await self._create(
            document_id,
            user_id,
            title=title,
            description=description,
            priority=Priority(priority),
            status=RecommendationStatus.PENDING,
        )

    async def update_status(self, recommendation_id: UUID, status: RecommendationStatus) -> dict:
        return await self._update(recommendation_id, status=RecommendationStatus(status))


class ProblemReportService(AnnotationService):
    """Problem reports filed against documents."""

    kind = "report"
    fields = ("title", "description", "type", "severity", "status")
    crud = report_crud

    async def create(
        self,
        document_id: UUID,
        user_id: UUID,
        title: str,
        description: str,
        type: ReportType = ReportType.ERROR,
        severity: Severity = Severity.MEDIUM,
    ) -> dict:
        return await self._create(
            document_id,
            user_id,
            title=title,
            description=description,
            type=ReportType(type),
            severity=Severity(severity),
            status=ReportStatus.OPEN,
        )

    async def update_status(self, report_id: UUID, status: ReportStatus) -> dict:
        return await self._update(report_id, status=ReportStatus(status))
