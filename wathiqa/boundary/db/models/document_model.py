"""
Document ORM model.

A filed case document. Its address is copied onto the row (reference and
components) so prefix queries never need a join.

Dependencies: sqlalchemy, wathiqa.boundary.db.base
System role: Document persistence
"""

import uuid

from sqlalchemy import JSON, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wathiqa.boundary.db.base import Base, UUIDMixin, TimestampMixin


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        section_id: Section the document is filed in
        reference: Canonical address string (immutable)
        block_label, row_label, column_label: Address components
        title: Document title
        category: Free category label
        status: Free status label
        description: Free-text notes
        document_metadata: Opaque caller metadata
        created_by: Uploading user (SET NULL on user deletion)

    Relationships:
        section: Parent SectionModel
        papers: Attached PaperModel rows (cascade delete)
    """

    __tablename__ = "documents"

    section_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("sections.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    reference: Mapped[str] = mapped_column(String(11), nullable=False, index=True)
    block_label: Mapped[str] = mapped_column(String(3), nullable=False, index=True)
    row_label: Mapped[str] = mapped_column(String(3), nullable=False)
    column_label: Mapped[str] = mapped_column(String(3), nullable=False)

    title: Mapped[str] = mapped_column(String(512), nullable=False)
    category: Mapped[str | None] = mapped_column(String(128), nullable=True)
    status: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    document_metadata: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        doc="Opaque metadata supplied by the uploader",
    )

    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    section = relationship("SectionModel", back_populates="documents")
    papers = relationship(
        "PaperModel",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="PaperModel.created_at",
    )
