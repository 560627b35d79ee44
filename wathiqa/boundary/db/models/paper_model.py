"""
Paper ORM model.

Attachment metadata belonging to a document. File bytes live in the
external object store; only the key and descriptors are kept here.

Dependencies: sqlalchemy, wathiqa.boundary.db.base
System role: Attachment persistence
"""

import uuid

from sqlalchemy import ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wathiqa.boundary.db.base import Base, UUIDMixin, TimestampMixin


class PaperModel(Base, UUIDMixin, TimestampMixin):
    """Attachment belonging to a document."""

    __tablename__ = "papers"

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    attachment_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    file_type: Mapped[str | None] = mapped_column(String(32), nullable=True)
    file_size: Mapped[int | None] = mapped_column(Integer, nullable=True)

    document = relationship("DocumentModel", back_populates="papers")
