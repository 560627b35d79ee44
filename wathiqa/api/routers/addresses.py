"""
Address allocation API endpoint.

Routes: POST /addresses - Validate an address and resolve its section

Dependencies: wathiqa.application.services, wathiqa.models
System role: Address allocation HTTP API
"""

from fastapi import APIRouter, Depends

from wathiqa.api.deps.dependencies import get_allocation_service, require_capability
from wathiqa.api.error_handling import handle_archive_errors
from wathiqa.application.services import AllocationService, commit_changes
from wathiqa.core.access import AccessSession
from wathiqa.models.block import AddressResponse, AllocateAddressRequest

router = APIRouter(prefix="/addresses", tags=["addresses"])


@router.post("", response_model=AddressResponse)
@handle_archive_errors
async def allocate_address(
    request: AllocateAddressRequest,
    _session: AccessSession = Depends(require_capability("can_upload")),
    allocation_service: AllocationService = Depends(get_allocation_service),
) -> AddressResponse:
    """
    Allocate ``block.row.column`` and return its section.

    Raises:
        HTTPException(400): Malformed component
        HTTPException(404): Block not registered
        HTTPException(503): Store unavailable
    """
    address = await allocation_service.allocate(request.block, request.row, request.column)
    section_id = await allocation_service.resolve_section(address)
    await commit_changes(allocation_service.db, "resolve_section", reference=address.reference)
    return AddressResponse(
        reference=address.reference,
        block=address.block,
        row=address.row,
        column=address.column,
        section_id=section_id,
    )
