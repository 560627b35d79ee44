"""
Block catalog API endpoints.

Routes:
- GET /blocks - Fixed and custom block labels
- POST /blocks - Register a custom block
- GET /blocks/{label}/rows - Rows with allocated sections
- GET /blocks/{label}/rows/{row}/sections - Sections allocated in a row
- GET /blocks/{label}/documents - Documents filed under a block
- GET /blocks/{label}/rows/{row}/documents - Documents filed under a block row

Dependencies: wathiqa.application.services, wathiqa.models
System role: Block catalog HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query

from wathiqa.api.deps.dependencies import (
    get_activity_service,
    get_allocation_service,
    get_block_service,
    get_document_service,
    get_settings_dependency,
    require_capability,
)
from wathiqa.api.error_handling import handle_archive_errors
from wathiqa.application.services import (
    ActivityService,
    AllocationService,
    BlockService,
    DocumentService,
    commit_changes,
)
from wathiqa.configs import Settings
from wathiqa.core.access import AccessSession
from wathiqa.core.constants import ActivityAction
from wathiqa.models.block import (
    BlockCatalogResponse,
    RegisterBlockRequest,
    RowListResponse,
    SectionResponse,
)
from wathiqa.models.document import DocumentResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/blocks", tags=["blocks"])


@router.get("", response_model=BlockCatalogResponse)
@handle_archive_errors
async def list_blocks(
    block_service: BlockService = Depends(get_block_service),
) -> BlockCatalogResponse:
    """List the fixed A-Z blocks followed by registered custom blocks."""
    custom = await block_service.list_custom_blocks()
    return BlockCatalogResponse(
        fixed=block_service.list_fixed_blocks(),
        custom=sorted(custom),
    )


@router.post("", response_model=BlockCatalogResponse, status_code=201)
@handle_archive_errors
async def register_block(
    request: RegisterBlockRequest,
    session: AccessSession = Depends(require_capability("can_manage_blocks")),
    block_service: BlockService = Depends(get_block_service),
    activity_service: ActivityService = Depends(get_activity_service),
) -> BlockCatalogResponse:
    """
    Register a custom block.

    Committed before the response, so the block is usable once 201 is returned.

    Raises:
        HTTPException(400): Malformed label
        HTTPException(409): Fixed or already registered
        HTTPException(403): Caller cannot manage blocks
        HTTPException(503): Store unavailable, nothing was registered
    """
    logger.info("Registering custom block", extra={"block": request.label, "user_id": str(session.user_id)})
    label = await block_service.register_custom_block(request.label, created_by=session.user_id)
    await activity_service.record(session.user_id, ActivityAction.BLOCK_REGISTERED, "block", label)
    await commit_changes(block_service.db, "register_custom_block", block=label)
    custom = await block_service.list_custom_blocks()
    return BlockCatalogResponse(fixed=block_service.list_fixed_blocks(), custom=sorted(custom))


@router.get("/{label}/rows", response_model=RowListResponse)
@handle_archive_errors
async def list_rows(
    label: str,
    allocation_service: AllocationService = Depends(get_allocation_service),
) -> RowListResponse:
    """
    Rows of ``label`` that have at least one allocated section.

    Raises:
        HTTPException(400): Malformed label
        HTTPException(404): Block not registered
    """
    return RowListResponse(block=label, rows=await allocation_service.list_rows(label))


@router.get("/{label}/rows/{row}/sections", response_model=list[SectionResponse])
@handle_archive_errors
async def list_sections(
    label: str,
    row: str,
    allocation_service: AllocationService = Depends(get_allocation_service),
) -> list[SectionResponse]:
    """Sections allocated under ``label.row``, in column order."""
    sections = await allocation_service.list_sections(label, row)
    return [SectionResponse(**s) for s in sections]


@router.get("/{label}/documents", response_model=list[DocumentResponse])
@handle_archive_errors
async def list_block_documents(
    label: str,
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    document_service: DocumentService = Depends(get_document_service),
    settings: Settings = Depends(get_settings_dependency),
) -> list[DocumentResponse]:
    """Documents whose block is ``label``, oldest first."""
    documents = await document_service.get_documents_by_prefix(
        label,
        limit=_page_size(limit, settings),
        offset=offset,
    )
    return [DocumentResponse(**d) for d in documents]


@router.get("/{label}/rows/{row}/documents", response_model=list[DocumentResponse])
@handle_archive_errors
async def list_row_documents(
    label: str,
    row: str,
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    document_service: DocumentService = Depends(get_document_service),
    settings: Settings = Depends(get_settings_dependency),
) -> list[DocumentResponse]:
    """Documents filed under ``label.row``, oldest first."""
    documents = await document_service.get_documents_by_prefix(
        label,
        row,
        limit=_page_size(limit, settings),
        offset=offset,
    )
    return [DocumentResponse(**d) for d in documents]


def _page_size(limit: int | None, settings: Settings) -> int:
    if limit is None:
        return settings.archive.default_page_size
    return min(limit, settings.archive.max_page_size)
