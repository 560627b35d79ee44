"""
User activity service.

Appends audit entries inside the caller's unit of work, so an entry is
committed together with the change it describes.

Dependencies: wathiqa.boundary.db.CRUD, wathiqa.core.constants
System role: User activity use cases
"""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from wathiqa.application.services.errors import store_operation
from wathiqa.boundary.db.CRUD.activity_crud import activity_crud
from wathiqa.boundary.db.models.activity_model import ActivityLogModel
from wathiqa.core.constants import ActivityAction


def activity_to_dict(entry: ActivityLogModel) -> dict:
    return {
        "id": entry.id,
        "user_id": entry.user_id,
        "action": ActivityAction(entry.action).value,
        "resource_type": entry.resource_type,
        "resource_id": entry.resource_id,
        "details": entry.details,
        "created_at": entry.created_at,
    }


class ActivityService:
    """User activity orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def record(
        self,
        user_id: UUID,
        action: ActivityAction,
        resource_type: str | None = None,
        resource_id: Any = None,
        details: dict | None = None,
    ) -> None:
        """
        Append an activity entry. Not committed here.

        Raises:
            ArchiveStoreError: Store unavailable
        """
        async with store_operation("record_activity", action=ActivityAction(action).value):
            await activity_crud.create(
                self.db,
                user_id=user_id,
                action=ActivityAction(action),
                resource_type=resource_type,
                resource_id=str(resource_id) if resource_id is not None else None,
                details=details or {},
            )

    async def list_for_user(self, user_id: UUID, limit: int = 50) -> list[dict]:
        """Latest activity of ``user_id``, newest first."""
        async with store_operation("list_activity", user_id=user_id):
            entries = await activity_crud.get_by_user(self.db, user_id, limit)
        return [activity_to_dict(e) for e in entries]
