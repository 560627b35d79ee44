"""
Document binder service.

Files documents at resolved addresses and answers address-prefix queries.
A document's address never changes after creation.

Dependencies: wathiqa.boundary.db.CRUD, wathiqa.application.services.allocation_service
System role: Document filing and lookup use cases
"""

import logging
from typing import Any, AsyncIterator
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from wathiqa.application.services.allocation_service import AllocationService
from wathiqa.application.services.errors import store_operation
from wathiqa.boundary.db.CRUD.annotation_crud import recommendation_crud, report_crud
from wathiqa.boundary.db.CRUD.block_crud import block_crud
from wathiqa.boundary.db.CRUD.document_crud import document_crud
from wathiqa.boundary.db.CRUD.section_crud import section_crud
from wathiqa.boundary.db.models.annotation_model import (
    ProblemReportModel,
    RecommendationModel,
)
from wathiqa.boundary.db.models.document_model import DocumentModel
from wathiqa.core.addressing import Address, make_address, validate_block_label, validate_numeral_label
from wathiqa.core.constants import (
    CATEGORIES,
    DEFAULT_STATUS,
    STATUSES,
    RecommendationStatus,
    ReportStatus,
)
from wathiqa.core.exceptions import DocumentNotFoundError
from wathiqa.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


def document_to_dict(document: DocumentModel) -> dict[str, Any]:
    """Flatten a DocumentModel into the service-layer dict shape."""
    return {
        "id": document.id,
        "section_id": document.section_id,
        "reference": document.reference,
        "block": document.block_label,
        "row": document.row_label,
        "column": document.column_label,
        "title": document.title,
        "category": document.category,
        "status": document.status,
        "description": document.description,
        "metadata": document.document_metadata,
        "created_by": document.created_by,
        "created_at": document.created_at,
        "updated_at": document.updated_at,
    }


class DocumentService:
    """Document binder orchestrator."""

    def __init__(self, db: AsyncSession, allocator: AllocationService | None = None) -> None:
        """
        Initialize document service with async database session.

        Args:
            db: Async SQLAlchemy session
            allocator: Address allocator (defaults to one on the same session)
        """
        self.db = db
        self.allocator = allocator or AllocationService(db)

    async def create_document(
        self,
        address: Address,
        title: str,
        category: str | None = None,
        status: str | None = None,
        description: str | None = None,
        metadata: dict | None = None,
        created_by: UUID | None = None,
    ) -> UUID:
        """
        File a new document at ``address``.

        Resolves (or creates) the section first. Several documents may share
        one address. Metadata is stored as given.

        Args:
            address: Validated address (normally from AllocationService.allocate)
            title: Document title
            category: Category label
            status: Status label (defaults to the first archive status)
            description: Free-text notes
            metadata: Opaque caller metadata
            created_by: Uploading user

        Returns:
            UUID: Created document ID

        Raises:
            InvalidFormatError: Address is malformed
            ArchiveStoreError: Store unavailable
        """
        address = make_address(*address)
        section_id = await self.allocator.resolve_section(address)

        async with store_operation("create_document", reference=address.reference):
            document = await document_crud.create(
                self.db,
                section_id=section_id,
                reference=address.reference,
                block_label=address.block,
                row_label=address.row,
                column_label=address.column,
                title=title,
                category=category,
                status=status or DEFAULT_STATUS,
                description=description,
                document_metadata=metadata or {},
                created_by=created_by,
            )

        log_with_context(
            logger,
            logging.INFO,
            "Document filed",
            document_id=document.id,
            reference=address.reference,
            section_id=section_id,
            title=title,
            metadata=metadata,
        )
        return document.id

    async def _iter_documents(
        self,
        block_label: str,
        row_label: str | None,
    ) -> AsyncIterator[dict]:
        async with store_operation("list_documents", block=block_label, row=row_label):
            async for document in document_crud.iter_by_prefix(self.db, block_label, row_label):
                yield document_to_dict(document)

    def list_by_block(self, block_label: str) -> AsyncIterator[dict]:
        """
        Lazily yield every document filed under ``block_label``.

        The label is validated before this returns. Call again for a fresh
        snapshot.

        Raises:
            InvalidFormatError: Label is malformed
        """
        validate_block_label(block_label)
        return self._iter_documents(block_label, None)

    def list_by_block_and_row(self, block_label: str, row_label: str) -> AsyncIterator[dict]:
        """
        Lazily yield every document filed under ``block_label.row_label``.

        Raises:
            InvalidFormatError: A label is malformed
        """
        validate_block_label(block_label)
        validate_numeral_label(row_label, "row")
        return self._iter_documents(block_label, row_label)

    async def get_documents_by_prefix(
        self,
        block_label: str,
        row_label: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict]:
        """
        Paged variant of the prefix listings for HTTP callers.

        Raises:
            InvalidFormatError: A label is malformed
        """
        validate_block_label(block_label)
        if row_label is not None:
            validate_numeral_label(row_label, "row")
        async with store_operation("get_documents_by_prefix", block=block_label):
            documents = await document_crud.get_by_prefix(
                self.db, block_label, row_label, limit=limit, offset=offset
            )
        return [document_to_dict(d) for d in documents]

    async def get_document(self, document_id: UUID) -> dict:
        """
        Get a document with its papers.

        Raises:
            DocumentNotFoundError: No such document
        """
        async with store_operation("get_document", document_id=document_id):
            document = await document_crud.get_with_papers(self.db, document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)

        data = document_to_dict(document)
        data["papers"] = [
            {
                "id": p.id,
                "document_id": p.document_id,
                "title": p.title,
                "content": p.content,
                "attachment_url": p.attachment_url,
                "file_type": p.file_type,
                "file_size": p.file_size,
                "created_at": p.created_at,
            }
            for p in document.papers
        ]
        return data

    async def search_documents(
        self,
        query: str | None = None,
        category: str | None = None,
        status: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict]:
        """Search by title substring with optional category/status filters."""
        async with store_operation("search_documents", query=query):
            documents = await document_crud.search(
                self.db,
                query=query,
                category=category,
                status=status,
                limit=limit,
                offset=offset,
            )
        return [document_to_dict(d) for d in documents]

    async def get_dashboard_stats(self) -> dict:
        """
        Aggregate counts for the dashboard.

        Returns:
            dict: total_documents, documents_by_status, custom_blocks, sections,
            open_reports, pending_recommendations
        """
        async with store_operation("get_dashboard_stats"):
            by_status = await document_crud.count_by_status(self.db)
            return {
                "total_documents": sum(by_status.values()),
                "documents_by_status": by_status,
                "custom_blocks": await block_crud.count(self.db),
                "sections": await section_crud.count(self.db),
                "open_reports": await report_crud.count(
                    self.db, ProblemReportModel.status == ReportStatus.OPEN
                ),
                "pending_recommendations": await recommendation_crud.count(
                    self.db, RecommendationModel.status == RecommendationStatus.PENDING
                ),
            }

    async def get_recent_documents(self, limit: int = 10) -> list[dict]:
        """The ``limit`` most recently filed documents, newest first."""
        async with store_operation("get_recent_documents", limit=limit):
            documents = await document_crud.get_recent(self.db, limit)
        return [document_to_dict(d) for d in documents]

    @staticmethod
    def vocabulary() -> dict:
        """Category and status labels offered to uploaders."""
        return {
            "categories": list(CATEGORIES),
            "statuses": list(STATUSES),
            "default_status": DEFAULT_STATUS,
        }
