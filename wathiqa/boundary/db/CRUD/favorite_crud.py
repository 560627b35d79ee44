"""
Favorite CRUD operations.

Dependencies: sqlalchemy, wathiqa.boundary.db.models
System role: Per-user document bookmark persistence
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from wathiqa.boundary.db.CRUD.base_crud import BaseCRUD
from wathiqa.boundary.db.models.document_model import DocumentModel
from wathiqa.boundary.db.models.favorite_model import FavoriteModel


class FavoriteCRUD(BaseCRUD[FavoriteModel]):
    """CRUD operations for FavoriteModel."""

    def __init__(self) -> None:
        """Initialize FavoriteCRUD with FavoriteModel."""
        super().__init__(FavoriteModel)

    async def add(self, session: AsyncSession, user_id: UUID, document_id: UUID) -> bool:
        """
        Bookmark a document for a user.

        Returns:
            True if the favorite was added, False if it already existed
        """
        return await self.insert_if_absent(
            session,
            conflict_on=["user_id", "document_id"],
            user_id=user_id,
            document_id=document_id,
        )

    async def remove(self, session: AsyncSession, user_id: UUID, document_id: UUID) -> bool:
        """
        Drop a user's bookmark.

        Returns:
            True if a favorite was removed, False if there was none
        """
        stmt = delete(FavoriteModel).where(
            FavoriteModel.user_id == user_id,
            FavoriteModel.document_id == document_id,
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def get_documents(self, session: AsyncSession, user_id: UUID) -> Sequence[DocumentModel]:
        """Documents the user has bookmarked, most recently bookmarked first."""
        stmt = (
            select(DocumentModel)
            .join(FavoriteModel, FavoriteModel.document_id == DocumentModel.id)
            .where(FavoriteModel.user_id == user_id)
            .order_by(FavoriteModel.created_at.desc(), FavoriteModel.id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


favorite_crud = FavoriteCRUD()
