"""
User activity ORM model.

Append-only audit trail of what each user did: sessions opened, blocks
registered, documents filed, favorites changed.

Dependencies: sqlalchemy, wathiqa.boundary.db.base, wathiqa.core.constants
System role: User activity persistence
"""

import uuid

from sqlalchemy import JSON, Enum, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from wathiqa.boundary.db.base import Base, CreatedAtMixin, UUIDMixin
from wathiqa.core.constants import ActivityAction


class ActivityLogModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Activity log entry.

    Attributes:
        user_id: Acting user
        action: What happened (ActivityAction)
        resource_type: Kind of record acted on (block, document, session)
        resource_id: Identifier of that record, as text
        details: Free-form context
    """

    __tablename__ = "user_activity_logs"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    action: Mapped[ActivityAction] = mapped_column(
        Enum(ActivityAction, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    resource_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    resource_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    details: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
