"""
Document CRUD operations.

Provides Create and Read operations for DocumentModel with address-prefix
queries, text search and status aggregation.

Dependencies: sqlalchemy, wathiqa.boundary.db.models
System role: Document persistence operations
"""

from typing import AsyncIterator, Sequence
from uuid import UUID

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from wathiqa.boundary.db.models.document_model import DocumentModel
from wathiqa.boundary.db.CRUD.base_crud import BaseCRUD


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with filtering by address prefix (block, block+row),
    title search and per-status counts.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    @staticmethod
    def _prefix_criteria(block_label: str, row_label: str | None) -> list:
        criteria = [DocumentModel.block_label == block_label]
        if row_label is not None:
            criteria.append(DocumentModel.row_label == row_label)
        return criteria

    async def get_by_prefix(
        self,
        session: AsyncSession,
        block_label: str,
        row_label: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve documents filed under a block, optionally a single row.

        Args:
            session: Async database session
            block_label: Block component to match exactly
            row_label: Row component to match exactly (None for whole block)
            limit: Maximum number of documents to return
            offset: Number of documents to skip

        Returns:
            Sequence of DocumentModels ordered by (created_at, id)
        """
        stmt = (
            select(DocumentModel)
            .where(*self._prefix_criteria(block_label, row_label))
            .order_by(DocumentModel.created_at, DocumentModel.id)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def iter_by_prefix(
        self,
        session: AsyncSession,
        block_label: str,
        row_label: str | None = None,
        batch_size: int = 100,
    ) -> AsyncIterator[DocumentModel]:
        """
        Lazily yield documents under a block (and row) in keyset batches.

        Each batch resumes after the last (created_at, id) seen, so rows
        inserted during iteration never shift rows already yielded.

        Args:
            session: Async database session
            block_label: Block component to match exactly
            row_label: Row component to match exactly (None for whole block)
            batch_size: Rows fetched per round trip

        Yields:
            DocumentModel rows ordered by (created_at, id)
        """
        criteria = self._prefix_criteria(block_label, row_label)
        last: DocumentModel | None = None
        while True:
            stmt = select(DocumentModel).where(*criteria)
            if last is not None:
                stmt = stmt.where(
                    or_(
                        DocumentModel.created_at > last.created_at,
                        and_(
                            DocumentModel.created_at == last.created_at,
                            DocumentModel.id > last.id,
                        ),
                    )
                )
            stmt = stmt.order_by(DocumentModel.created_at, DocumentModel.id).limit(batch_size)
            result = await session.execute(stmt)
            batch = result.scalars().all()
            for document in batch:
                yield document
            if len(batch) < batch_size:
                return
            last = batch[-1]

    async def get_with_papers(
        self,
        session: AsyncSession,
        id: UUID,
    ) -> DocumentModel | None:
        """
        Retrieve a document with eagerly loaded papers.

        Args:
            session: Async database session
            id: Document UUID

        Returns:
            DocumentModel with papers loaded, None if not found
        """
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.id == id)
            .options(selectinload(DocumentModel.papers))
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def search(
        self,
        session: AsyncSession,
        query: str | None = None,
        category: str | None = None,
        status: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[DocumentModel]:
        """
        Search documents by title substring with optional filters.

        Args:
            session: Async database session
            query: Case-insensitive title substring, matched literally (% and _ escaped)
            category: Exact category to match
            status: Exact status to match
            limit: Maximum number of documents to return
            offset: Number of documents to skip

        Returns:
            Sequence of matching DocumentModels, newest first
        """
        stmt = select(DocumentModel)
        if query:
            stmt = stmt.where(DocumentModel.title.icontains(query, autoescape=True))
        if category:
            stmt = stmt.where(DocumentModel.category == category)
        if status:
            stmt = stmt.where(DocumentModel.status == status)
        stmt = stmt.order_by(DocumentModel.created_at.desc()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_recent(self, session: AsyncSession, limit: int) -> Sequence[DocumentModel]:
        """Retrieve the ``limit`` most recently filed documents, newest first."""
        stmt = (
            select(DocumentModel)
            .order_by(DocumentModel.created_at.desc(), DocumentModel.id.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_by_status(self, session: AsyncSession) -> dict[str, int]:
        """
        Count documents per status.

        Returns:
            Mapping of status label to document count (None status keyed as "")
        """
        stmt = select(DocumentModel.status, func.count()).group_by(DocumentModel.status)
        result = await session.execute(stmt)
        return {status or "": count for status, count in result.all()}


document_crud = DocumentCRUD()
