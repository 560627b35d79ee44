"""
Favorite ORM model.

A user's bookmark on a document. At most one row per (user, document);
the unique key makes adding a favorite idempotent.

Dependencies: sqlalchemy, wathiqa.boundary.db.base
System role: Per-user document bookmarks
"""

import uuid

from sqlalchemy import ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wathiqa.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class FavoriteModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Favorite ORM model.

    Attributes:
        user_id: Owner of the bookmark
        document_id: Bookmarked document

    Relationships:
        document: The bookmarked DocumentModel
    """

    __tablename__ = "user_favorites"
    __table_args__ = (UniqueConstraint("user_id", "document_id"),)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
    )

    document = relationship("DocumentModel")
