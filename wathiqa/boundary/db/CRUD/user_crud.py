"""
User CRUD operations.

Dependencies: sqlalchemy, wathiqa.boundary.db.models
System role: User persistence operations
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wathiqa.boundary.db.models.user_model import UserModel
from wathiqa.boundary.db.CRUD.base_crud import BaseCRUD


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel."""

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    async def get_by_username(
        self,
        session: AsyncSession,
        username: str,
    ) -> UserModel | None:
        """
        Retrieve a user by unique username.

        Args:
            session: Async database session
            username: Login name

        Returns:
            UserModel if found, None otherwise
        """
        stmt = select(UserModel).where(UserModel.username == username)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


user_crud = UserCRUD()
