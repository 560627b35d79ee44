"""
Block catalog service.

Owns the set of usable block labels: the 26 fixed letters plus custom
labels registered by archivists.

Dependencies: wathiqa.boundary.db.CRUD, wathiqa.core.addressing
System role: Block namespace use cases
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from wathiqa.application.services.errors import store_operation
from wathiqa.boundary.db.CRUD.block_crud import block_crud
from wathiqa.core.addressing import FIXED_BLOCKS, is_fixed_block, validate_block_label
from wathiqa.core.exceptions import BlockAlreadyFixedError, BlockAlreadyRegisteredError

logger = logging.getLogger(__name__)


class BlockService:
    """Block catalog orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize block service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    @staticmethod
    def list_fixed_blocks() -> list[str]:
        """Return the fixed blocks A..Z in alphabetical order."""
        return list(FIXED_BLOCKS)

    async def list_custom_blocks(self) -> set[str]:
        """
        Return every registered custom block label.

        Raises:
            ArchiveStoreError: Store unavailable
        """
        async with store_operation("list_custom_blocks"):
            return await block_crud.get_labels(self.db)

    async def block_exists(self, label: str) -> bool:
        """
        True if ``label`` is a fixed block or a registered custom block.

        Raises:
            ArchiveStoreError: Store unavailable
        """
        if is_fixed_block(label):
            return True
        async with store_operation("block_exists", block=label):
            return await block_crud.get_by_label(self.db, label) is not None

    async def register_custom_block(self, label: str, created_by: UUID | None = None) -> str:
        """
        Register a new custom block label.

        A second registration of the same label is an error, not a no-op.

        Args:
            label: 1-3 uppercase letters, not a single fixed letter
            created_by: Registering user

        Returns:
            str: The registered label

        Raises:
            InvalidFormatError: Label is malformed
            BlockAlreadyFixedError: Label is one of A..Z
            BlockAlreadyRegisteredError: Label already registered
            ArchiveStoreError: Store unavailable
        """
        validate_block_label(label)
        if is_fixed_block(label):
            raise BlockAlreadyFixedError(label)

        async with store_operation("register_custom_block", block=label):
            inserted = await block_crud.register(self.db, label, created_by=created_by)

        if not inserted:
            logger.info("Custom block already registered", extra={"block": label})
            raise BlockAlreadyRegisteredError(label)

        logger.info(
            "Custom block registered",
            extra={"block": label, "created_by": str(created_by) if created_by else None},
        )
        return label
