"""
Annotation CRUD operations.

One generic class serves comments, recommendations and problem reports;
all three share document_id/user_id columns.

Dependencies: sqlalchemy, wathiqa.boundary.db.models
System role: Annotation persistence operations
"""

from typing import Any, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wathiqa.boundary.db.models.annotation_model import (
    CommentModel,
    ProblemReportModel,
    RecommendationModel,
)
from wathiqa.boundary.db.CRUD.base_crud import BaseCRUD

AnnotationT = TypeVar("AnnotationT", CommentModel, RecommendationModel, ProblemReportModel)


class AnnotationCRUD(BaseCRUD[AnnotationT]):
    """CRUD operations shared by all document annotations."""

    async def get_filtered(
        self,
        session: AsyncSession,
        document_id: UUID | None = None,
        status: Any = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[AnnotationT]:
        """
        Retrieve annotations, newest first.

        Args:
            session: Async database session
            document_id: Restrict to one document
            status: Restrict to one status (models with a status column only)
            limit: Maximum number of rows to return
            offset: Number of rows to skip

        Returns:
            Sequence of annotation rows
        """
        stmt = select(self.model)
        if document_id is not None:
            stmt = stmt.where(self.model.document_id == document_id)
        if status is not None:
            stmt = stmt.where(self.model.status == status)
        stmt = stmt.order_by(self.model.created_at.desc()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()


comment_crud = AnnotationCRUD(CommentModel)
recommendation_crud = AnnotationCRUD(RecommendationModel)
report_crud = AnnotationCRUD(ProblemReportModel)
