"""
Address allocation service.

Turns caller-supplied block/row/column labels into a validated address and
binds each distinct address to exactly one section. Also lists the rows
and sections allocated so far, for block to row to section browsing.

Dependencies: wathiqa.boundary.db.CRUD, wathiqa.core.addressing
System role: Filing address allocation and section resolution
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from wathiqa.application.services.block_service import BlockService
from wathiqa.application.services.errors import store_operation
from wathiqa.boundary.db.CRUD.section_crud import section_crud
from wathiqa.boundary.db.models.section_model import SectionModel
from wathiqa.core.addressing import (
    Address,
    decode,
    make_address,
    validate_block_label,
    validate_numeral_label,
)
from wathiqa.core.exceptions import UnknownBlockError

logger = logging.getLogger(__name__)


def section_to_dict(section: SectionModel) -> dict:
    return {
        "id": section.id,
        "reference": section.reference,
        "block": section.block_label,
        "row": section.row_label,
        "column": section.column_label,
        "created_at": section.created_at,
    }


class AllocationService:
    """Address allocator."""

    def __init__(self, db: AsyncSession, block_service: BlockService | None = None) -> None:
        """
        Initialize allocation service.

        Args:
            db: Async SQLAlchemy session
            block_service: Block catalog (defaults to one on the same session)
        """
        self.db = db
        self.block_service = block_service or BlockService(db)

    async def allocate(self, block_label: str, row_label: str, column_label: str) -> Address:
        """
        Validate components and return the address exactly as supplied.

        Never registers a block implicitly.

        Args:
            block_label: Fixed or registered custom block
            row_label: 1-3 digit row numeral
            column_label: 1-3 digit column numeral

        Returns:
            Address: Validated address

        Raises:
            InvalidFormatError: A component is malformed
            UnknownBlockError: Block is neither fixed nor registered
            ArchiveStoreError: Store unavailable
        """
        address = make_address(block_label, row_label, column_label)
        if not await self.block_service.block_exists(address.block):
            raise UnknownBlockError(address.block)
        return address

    async def resolve_section(self, address: Address | str) -> UUID:
        """
        Return the section bound to ``address``, creating it on first use.

        Idempotent per address: repeated or concurrent calls return the
        same SectionId, and a failed call may be retried.

        Args:
            address: Address or canonical reference string

        Returns:
            UUID: Section identifier

        Raises:
            InvalidFormatError: Address is malformed
            ArchiveStoreError: Store unavailable
        """
        address = decode(address) if isinstance(address, str) else make_address(*address)

        async with store_operation("resolve_section", reference=address.reference):
            section, created = await section_crud.get_or_create(self.db, address)

        if created:
            logger.info(
                "Section created",
                extra={"section_id": str(section.id), "reference": address.reference},
            )
        return section.id

    async def _require_block(self, block_label: str) -> None:
        validate_block_label(block_label)
        if not await self.block_service.block_exists(block_label):
            raise UnknownBlockError(block_label)

    async def list_rows(self, block_label: str) -> list[str]:
        """
        Row labels that have sections allocated under ``block_label``.

        Returns:
            list[str]: Row labels in numeric order

        Raises:
            InvalidFormatError: Label is malformed
            UnknownBlockError: Block is neither fixed nor registered
            ArchiveStoreError: Store unavailable
        """
        await self._require_block(block_label)
        async with store_operation("list_rows", block=block_label):
            return await section_crud.get_row_labels(self.db, block_label)

    async def list_sections(self, block_label: str, row_label: str) -> list[dict]:
        """
        Sections allocated under ``block_label.row_label``, by column.

        Raises:
            InvalidFormatError: A label is malformed
            UnknownBlockError: Block is neither fixed nor registered
            ArchiveStoreError: Store unavailable
        """
        await self._require_block(block_label)
        validate_numeral_label(row_label, "row")
        async with store_operation("list_sections", block=block_label, row=row_label):
            sections = await section_crud.get_by_row(self.db, block_label, row_label)
        return [section_to_dict(s) for s in sections]
