"""
Favorite service orchestrator.

Per-user bookmarks on filed documents. Adding twice or removing a missing
bookmark are both no-ops, so clients can retry freely.

Dependencies: wathiqa.boundary.db.CRUD
System role: Document bookmark use cases
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from wathiqa.application.services.document_service import document_to_dict
from wathiqa.application.services.errors import store_operation
from wathiqa.boundary.db.CRUD.document_crud import document_crud
from wathiqa.boundary.db.CRUD.favorite_crud import favorite_crud
from wathiqa.core.exceptions import DocumentNotFoundError

logger = logging.getLogger(__name__)


class FavoriteService:
    """Favorite service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def add_favorite(self, user_id: UUID, document_id: UUID) -> bool:
        """
        Bookmark ``document_id`` for ``user_id``.

        Returns:
            bool: True if newly added, False if already a favorite

        Raises:
            DocumentNotFoundError: No such document
            ArchiveStoreError: Store unavailable
        """
        async with store_operation("add_favorite", document_id=document_id):
            if not await document_crud.exists(self.db, document_id):
                raise DocumentNotFoundError(document_id)
            added = await favorite_crud.add(self.db, user_id, document_id)
        logger.info(
            "Favorite added" if added else "Favorite already present",
            extra={"user_id": str(user_id), "document_id": str(document_id)},
        )
        return added

    async def remove_favorite(self, user_id: UUID, document_id: UUID) -> bool:
        """
        Drop the bookmark if present.

        Returns:
            bool: True if a favorite was removed
        """
        async with store_operation("remove_favorite", document_id=document_id):
            return await favorite_crud.remove(self.db, user_id, document_id)

    async def list_favorites(self, user_id: UUID) -> list[dict]:
        """Bookmarked documents of ``user_id``, most recent bookmark first."""
        async with store_operation("list_favorites", user_id=user_id):
            documents = await favorite_crud.get_documents(self.db, user_id)
        return [document_to_dict(d) for d in documents]
