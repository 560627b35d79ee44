"""
Document API endpoints.

Routes:
- POST /documents - File a document at an address
- GET /documents - Search documents
- GET /documents/vocabulary - Category and status labels
- GET /documents/favorites - Caller's bookmarked documents
- GET /documents/{id} - Document with papers
- POST /documents/{id}/favorite - Bookmark a document
- DELETE /documents/{id}/favorite - Drop a bookmark
- GET /documents/{id}/papers - List papers
- POST /documents/{id}/papers - Attach a paper
- DELETE /documents/papers/{paper_id} - Remove a paper

Dependencies: wathiqa.application.services, wathiqa.models
System role: Document filing HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from wathiqa.api.deps.dependencies import (
    get_activity_service,
    get_allocation_service,
    get_document_service,
    get_favorite_service,
    get_paper_service,
    get_settings_dependency,
    require_capability,
)
from wathiqa.api.error_handling import handle_archive_errors
from wathiqa.application.services import (
    ActivityService,
    AllocationService,
    DocumentService,
    FavoriteService,
    PaperService,
    commit_changes,
)
from wathiqa.configs import Settings
from wathiqa.core.access import AccessSession
from wathiqa.core.constants import ActivityAction
from wathiqa.models.common import MessageResponse
from wathiqa.models.document import (
    CreateDocumentRequest,
    CreatePaperRequest,
    DocumentDetailResponse,
    DocumentResponse,
    FavoriteResponse,
    PaperResponse,
    VocabularyResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])

signed_in = require_capability()


@router.post("", response_model=DocumentResponse, status_code=201)
@handle_archive_errors
async def create_document(
    request: CreateDocumentRequest,
    session: AccessSession = Depends(require_capability("can_upload")),
    allocation_service: AllocationService = Depends(get_allocation_service),
    document_service: DocumentService = Depends(get_document_service),
    activity_service: ActivityService = Depends(get_activity_service),
) -> DocumentResponse:
    """
    Allocate the address and file a document there.

    Raises:
        HTTPException(400): Malformed address component
        HTTPException(404): Block not registered
        HTTPException(403): Caller cannot upload
        HTTPException(503): Store unavailable, nothing was filed
    """
    address = await allocation_service.allocate(request.block, request.row, request.column)

    logger.info(
        "Filing document",
        extra={"reference": address.reference, "user_id": str(session.user_id)},
    )

    document_id = await document_service.create_document(
        address,
        title=request.title,
        category=request.category,
        status=request.status,
        description=request.description,
        metadata=request.metadata,
        created_by=session.user_id,
    )
    await activity_service.record(
        session.user_id,
        ActivityAction.DOCUMENT_FILED,
        "document",
        document_id,
        details={"reference": address.reference},
    )
    await commit_changes(document_service.db, "create_document", reference=address.reference)
    document = await document_service.get_document(document_id)
    return DocumentResponse(**document)


@router.get("", response_model=list[DocumentResponse])
@handle_archive_errors
async def search_documents(
    q: str | None = Query(None, description="Title substring, matched literally"),
    category: str | None = None,
    status: str | None = None,
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    document_service: DocumentService = Depends(get_document_service),
    settings: Settings = Depends(get_settings_dependency),
) -> list[DocumentResponse]:
    """Search by title with optional category/status filters, newest first."""
    page = min(limit or settings.archive.default_page_size, settings.archive.max_page_size)
    documents = await document_service.search_documents(
        query=q, category=category, status=status, limit=page, offset=offset
    )
    return [DocumentResponse(**d) for d in documents]


@router.get("/vocabulary", response_model=VocabularyResponse)
async def get_vocabulary() -> VocabularyResponse:
    return VocabularyResponse(**DocumentService.vocabulary())


@router.get("/favorites", response_model=list[DocumentResponse])
@handle_archive_errors
async def list_favorites(
    session: AccessSession = Depends(signed_in),
    favorite_service: FavoriteService = Depends(get_favorite_service),
) -> list[DocumentResponse]:
    """The caller's bookmarked documents, most recent bookmark first."""
    documents = await favorite_service.list_favorites(session.user_id)
    return [DocumentResponse(**d) for d in documents]


@router.get("/{document_id}", response_model=DocumentDetailResponse)
@handle_archive_errors
async def get_document(
    document_id: UUID,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentDetailResponse:
    """
    Get a document with its papers.

    Raises:
        HTTPException(404): Document not found
    """
    return DocumentDetailResponse(**await document_service.get_document(document_id))


@router.post("/{document_id}/favorite", response_model=FavoriteResponse)
@handle_archive_errors
async def add_favorite(
    document_id: UUID,
    session: AccessSession = Depends(signed_in),
    favorite_service: FavoriteService = Depends(get_favorite_service),
    activity_service: ActivityService = Depends(get_activity_service),
) -> FavoriteResponse:
    """
    Bookmark a document; repeating the call is a no-op.

    Raises:
        HTTPException(404): Document not found
    """
    added = await favorite_service.add_favorite(session.user_id, document_id)
    if added:
        await activity_service.record(
            session.user_id, ActivityAction.FAVORITE_ADDED, "document", document_id
        )
    await commit_changes(favorite_service.db, "add_favorite", document_id=document_id)
    return FavoriteResponse(document_id=document_id, is_favorited=True, changed=added)


@router.delete("/{document_id}/favorite", response_model=FavoriteResponse)
@handle_archive_errors
async def remove_favorite(
    document_id: UUID,
    session: AccessSession = Depends(signed_in),
    favorite_service: FavoriteService = Depends(get_favorite_service),
    activity_service: ActivityService = Depends(get_activity_service),
) -> FavoriteResponse:
    removed = await favorite_service.remove_favorite(session.user_id, document_id)
    if removed:
        await activity_service.record(
            session.user_id, ActivityAction.FAVORITE_REMOVED, "document", document_id
        )
    await commit_changes(favorite_service.db, "remove_favorite", document_id=document_id)
    return FavoriteResponse(document_id=document_id, is_favorited=False, changed=removed)


@router.get("/{document_id}/papers", response_model=list[PaperResponse])
@handle_archive_errors
async def list_papers(
    document_id: UUID,
    paper_service: PaperService = Depends(get_paper_service),
) -> list[PaperResponse]:
    papers = await paper_service.list_papers(document_id)
    return [PaperResponse(**p) for p in papers]


@router.post("/{document_id}/papers", response_model=PaperResponse, status_code=201)
@handle_archive_errors
async def add_paper(
    document_id: UUID,
    request: CreatePaperRequest,
    _session: AccessSession = Depends(require_capability("can_upload")),
    paper_service: PaperService = Depends(get_paper_service),
) -> PaperResponse:
    """
    Record a paper attachment.

    Raises:
        HTTPException(404): Document not found
    """
    paper = await paper_service.add_paper(document_id, **request.model_dump())
    await commit_changes(paper_service.db, "add_paper", document_id=document_id)
    return PaperResponse(**paper)


@router.delete("/papers/{paper_id}", response_model=MessageResponse)
@handle_archive_errors
async def delete_paper(
    paper_id: UUID,
    _session: AccessSession = Depends(require_capability("can_upload")),
    paper_service: PaperService = Depends(get_paper_service),
) -> MessageResponse:
    await paper_service.delete_paper(paper_id)
    await commit_changes(paper_service.db, "delete_paper", paper_id=paper_id)
    return MessageResponse(message="Paper deleted")
