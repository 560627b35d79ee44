"""
Paper service orchestrator.

Records attachment metadata for filed documents. Uploading the bytes is
the object store's job; this service only proposes the storage key.

Dependencies: wathiqa.boundary.db.CRUD, wathiqa.core.addressing
System role: Attachment metadata use cases
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from wathiqa.application.services.errors import store_operation
from wathiqa.boundary.db.CRUD.document_crud import document_crud
from wathiqa.boundary.db.CRUD.paper_crud import paper_crud
from wathiqa.core.addressing import attachment_key, decode
from wathiqa.core.exceptions import DocumentNotFoundError, PaperNotFoundError

logger = logging.getLogger(__name__)


def _paper_to_dict(paper) -> dict:
    return {
        "id": paper.id,
        "document_id": paper.document_id,
        "title": paper.title,
        "content": paper.content,
        "attachment_url": paper.attachment_url,
        "file_type": paper.file_type,
        "file_size": paper.file_size,
        "created_at": paper.created_at,
    }


class PaperService:
    """Paper service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize paper service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def add_paper(
        self,
        document_id: UUID,
        title: str,
        content: str | None = None,
        attachment_url: str | None = None,
        filename: str | None = None,
        file_type: str | None = None,
        file_size: int | None = None,
    ) -> dict:
        """
        Attach a paper to a document.

        When no attachment_url is given but a filename is, the key is derived
        from the document's address (``{block}/{reference}/{filename}``).

        Raises:
            DocumentNotFoundError: No such document
        """
        async with store_operation("add_paper", document_id=document_id):
            document = await document_crud.get_by_id(self.db, document_id)
            if document is None:
                raise DocumentNotFoundError(document_id)

            if attachment_url is None and filename:
                attachment_url = attachment_key(decode(document.reference), filename)

            paper = await paper_crud.create(
                self.db,
                document_id=document_id,
                title=title,
                content=content,
                attachment_url=attachment_url,
                file_type=file_type,
                file_size=file_size,
            )

        logger.info(
            "Paper attached",
            extra={"paper_id": str(paper.id), "document_id": str(document_id)},
        )
        return _paper_to_dict(paper)

    async def list_papers(self, document_id: UUID) -> list[dict]:
        """
        List papers of a document.

        Raises:
            DocumentNotFoundError: No such document
        """
        async with store_operation("list_papers", document_id=document_id):
            if not await document_crud.exists(self.db, document_id):
                raise DocumentNotFoundError(document_id)
            papers = await paper_crud.get_by_document_id(self.db, document_id)
        return [_paper_to_dict(p) for p in papers]

    async def delete_paper(self, paper_id: UUID) -> bool:
        """
        Delete a paper record.

        Raises:
            PaperNotFoundError: No such paper
        """
        async with store_operation("delete_paper", paper_id=paper_id):
            deleted = await paper_crud.delete_by_id(self.db, paper_id)
        if not deleted:
            raise PaperNotFoundError(paper_id)
        logger.info("Paper deleted", extra={"paper_id": str(paper_id)})
        return True
