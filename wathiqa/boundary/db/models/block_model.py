"""
Custom block ORM model.

Only custom blocks are stored. The 26 fixed blocks A-Z always exist and
never get a row here.

Dependencies: sqlalchemy, wathiqa.boundary.db.base
System role: Persistence of the custom block namespace
"""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from wathiqa.boundary.db.base import Base, UUIDMixin, TimestampMixin


class CustomBlockModel(Base, UUIDMixin, TimestampMixin):
    """
    Registered custom block label.

    Attributes:
        id: UUID primary key (auto-generated)
        label: 1-3 uppercase letters, unique
        created_by: User who registered the block (nullable)
    """

    __tablename__ = "custom_blocks"

    label: Mapped[str] = mapped_column(
        String(3),
        nullable=False,
        unique=True,
        doc="Block label",
    )

    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        nullable=True,
        default=None,
        doc="Registering user id",
    )
