"""
Activity log CRUD operations.

Dependencies: sqlalchemy, wathiqa.boundary.db.models
System role: User activity persistence
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wathiqa.boundary.db.CRUD.base_crud import BaseCRUD
from wathiqa.boundary.db.models.activity_model import ActivityLogModel


class ActivityCRUD(BaseCRUD[ActivityLogModel]):
    """CRUD operations for ActivityLogModel. Entries are never updated."""

    def __init__(self) -> None:
        """Initialize ActivityCRUD with ActivityLogModel."""
        super().__init__(ActivityLogModel)

    async def get_by_user(
        self,
        session: AsyncSession,
        user_id: UUID,
        limit: int,
    ) -> Sequence[ActivityLogModel]:
        """
        Latest activity of one user.

        Args:
            session: Async database session
            user_id: Acting user
            limit: Maximum number of entries

        Returns:
            Entries newest first
        """
        stmt = (
            select(ActivityLogModel)
            .where(ActivityLogModel.user_id == user_id)
            .order_by(ActivityLogModel.created_at.desc(), ActivityLogModel.id.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


activity_crud = ActivityCRUD()
