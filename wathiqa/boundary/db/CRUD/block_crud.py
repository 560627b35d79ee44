"""
Custom block CRUD operations.

Dependencies: sqlalchemy, wathiqa.boundary.db.models
System role: Custom block persistence operations
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wathiqa.boundary.db.models.block_model import CustomBlockModel
from wathiqa.boundary.db.CRUD.base_crud import BaseCRUD


class BlockCRUD(BaseCRUD[CustomBlockModel]):
    """CRUD operations for CustomBlockModel."""

    def __init__(self) -> None:
        """Initialize BlockCRUD with CustomBlockModel."""
        super().__init__(CustomBlockModel)

    async def get_by_label(
        self,
        session: AsyncSession,
        label: str,
    ) -> CustomBlockModel | None:
        """
        Retrieve a custom block by its label.

        Args:
            session: Async database session
            label: Exact block label

        Returns:
            CustomBlockModel if registered, None otherwise
        """
        stmt = select(CustomBlockModel).where(CustomBlockModel.label == label)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_labels(self, session: AsyncSession) -> set[str]:
        """Return every registered custom label."""
        result = await session.execute(select(CustomBlockModel.label))
        return set(result.scalars().all())

    async def register(
        self,
        session: AsyncSession,
        label: str,
        created_by: UUID | None = None,
    ) -> bool:
        """
        Atomically register a label.

        Args:
            session: Async database session
            label: Validated custom label
            created_by: Registering user

        Returns:
            True if registered by this call, False if the label already existed
        """
        return await self.insert_if_absent(
            session,
            conflict_on=["label"],
            label=label,
            created_by=created_by,
        )


block_crud = BlockCRUD()
