"""
Section ORM model.

A section is the resolved storage target of one filing address. The
canonical reference string is unique, which is what makes section
resolution an atomic get-or-create.

Dependencies: sqlalchemy, wathiqa.boundary.db.base
System role: Address to section binding
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wathiqa.boundary.db.base import Base, UUIDMixin, TimestampMixin


class SectionModel(Base, UUIDMixin, TimestampMixin):
    """
    Section bound 1:1 to a canonical address.

    Attributes:
        id: UUID primary key (the SectionId)
        reference: Canonical ``block.row.column`` string, unique
        block_label: Block component
        row_label: Row component
        column_label: Column component
        documents: Documents filed at this address
    """

    __tablename__ = "sections"

    reference: Mapped[str] = mapped_column(String(11), nullable=False, unique=True)
    block_label: Mapped[str] = mapped_column(String(3), nullable=False, index=True)
    row_label: Mapped[str] = mapped_column(String(3), nullable=False)
    column_label: Mapped[str] = mapped_column(String(3), nullable=False)

    documents = relationship("DocumentModel", back_populates="section")
