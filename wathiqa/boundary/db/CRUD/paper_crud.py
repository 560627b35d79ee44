"""
Paper CRUD operations.

Dependencies: sqlalchemy, wathiqa.boundary.db.models
System role: Attachment metadata persistence
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wathiqa.boundary.db.models.paper_model import PaperModel
from wathiqa.boundary.db.CRUD.base_crud import BaseCRUD


class PaperCRUD(BaseCRUD[PaperModel]):
    """CRUD operations for PaperModel."""

    def __init__(self) -> None:
        """Initialize PaperCRUD with PaperModel."""
        super().__init__(PaperModel)

    async def get_by_document_id(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> Sequence[PaperModel]:
        """Retrieve all papers of a document, oldest first."""
        stmt = (
            select(PaperModel)
            .where(PaperModel.document_id == document_id)
            .order_by(PaperModel.created_at)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


paper_crud = PaperCRUD()
