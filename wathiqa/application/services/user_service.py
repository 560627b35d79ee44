"""
User service orchestrator.

Manages staff accounts, their roles and restriction state, and opens
access sessions with capabilities resolved once per session.

Dependencies: wathiqa.boundary.db.CRUD, wathiqa.core.access, wathiqa.configs
System role: User and access use cases
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from wathiqa.application.services.errors import store_operation
from wathiqa.boundary.db.CRUD.user_crud import user_crud
from wathiqa.boundary.db.models.user_model import UserModel
from wathiqa.configs import get_settings
from wathiqa.core.access import AccessSession, Role, open_session
from wathiqa.core.exceptions import UserNotFoundError, UsernameTakenError

logger = logging.getLogger(__name__)


def user_to_dict(user: UserModel) -> dict:
    """Flatten a UserModel into the service-layer dict shape."""
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "full_name": user.full_name,
        "role": Role(user.role).value,
        "is_active": user.is_active,
        "is_restricted": user.is_restricted,
        "restriction_reason": user.restriction_reason,
        "restricted_at": user.restricted_at,
        "restricted_by": user.restricted_by,
        "created_at": user.created_at,
    }


class UserService:
    """User service orchestrator."""

    def __init__(self, db: AsyncSession, session_ttl: timedelta | None = None) -> None:
        """
        Initialize user service with async database session.

        Args:
            db: Async SQLAlchemy session
            session_ttl: Access session lifetime (defaults to settings)
        """
        self.db = db
        self.session_ttl = session_ttl or timedelta(
            hours=get_settings().archive.session_ttl_hours
        )

    async def _require_user(self, user_id: UUID) -> UserModel:
        async with store_operation("get_user", user_id=user_id):
            user = await user_crud.get_by_id(self.db, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def create_user(
        self,
        username: str,
        email: str,
        full_name: str,
        role: Role = Role.VIEWER,
    ) -> UUID:
        """
        Create a staff account.

        The username is claimed with a single conflict-free insert, so two
        concurrent creates cannot both succeed.

        Raises:
            UsernameTakenError: Username already taken
            ArchiveStoreError: Store unavailable
        """
        user_id = uuid4()
        async with store_operation("create_user", username=username):
            inserted = await user_crud.insert_if_absent(
                self.db,
                conflict_on=["username"],
                id=user_id,
                username=username,
                email=email,
                full_name=full_name,
                role=Role(role),
            )
        if not inserted:
            raise UsernameTakenError(username)
        logger.info("User created", extra={"user_id": str(user_id), "role": Role(role).value})
        return user_id

    async def get_user(self, user_id: UUID) -> dict:
        """
        Get user by ID.

        Raises:
            UserNotFoundError: No such user
        """
        return user_to_dict(await self._require_user(user_id))

    async def list_users(self, limit: int | None = None, offset: int = 0) -> list[dict]:
        """List users, oldest first."""
        async with store_operation("list_users"):
            users = await user_crud.get_all(self.db, limit=limit, offset=offset)
        return [user_to_dict(u) for u in users]

    async def update_role(self, user_id: UUID, role: Role) -> dict:
        """
        Change a user's role.

        Raises:
            UserNotFoundError: No such user
        """
        await self._require_user(user_id)
        async with store_operation("update_role", user_id=user_id):
            updated = await user_crud.update_by_id(self.db, user_id, role=Role(role))
        logger.info("User role changed", extra={"user_id": str(user_id), "role": Role(role).value})
        return user_to_dict(updated)

    async def restrict_user(
        self,
        user_id: UUID,
        restricted_by: UUID,
        reason: str | None = None,
        restrict: bool = True,
    ) -> dict:
        """
        Lock or unlock an account.

        Lifting a restriction clears reason, timestamp and author.

        Raises:
            UserNotFoundError: No such user
        """
        await self._require_user(user_id)
        if restrict:
            fields = {
                "is_restricted": True,
                "restriction_reason": reason,
                "restricted_at": datetime.now(timezone.utc),
                "restricted_by": restricted_by,
            }
        else:
            fields = {
                "is_restricted": False,
                "restriction_reason": None,
                "restricted_at": None,
                "restricted_by": None,
            }
        async with store_operation("restrict_user", user_id=user_id):
            updated = await user_crud.update_by_id(self.db, user_id, **fields)
        logger.info(
            "User restriction changed",
            extra={"user_id": str(user_id), "restricted": restrict, "by": str(restricted_by)},
        )
        return user_to_dict(updated)

    async def open_session(self, user_id: UUID, now: datetime) -> AccessSession:
        """
        Open an access session for ``user_id`` starting at ``now``.

        Raises:
            UserNotFoundError: No such user
        """
        user = await self._require_user(user_id)
        return open_session(
            user_id=user.id,
            role=user.role,
            now=now,
            ttl=self.session_ttl,
            is_active=user.is_active,
            is_restricted=user.is_restricted,
            restriction_reason=user.restriction_reason,
        )
