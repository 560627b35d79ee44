"""
Document domain models and schemas.

Request/response schemas for document filing and lookup.

Dependencies: pydantic
System role: Document API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from wathiqa.core.constants import DEFAULT_STATUS


class CreateDocumentRequest(BaseModel):
    """Request schema for filing a document."""

    block: str = Field(..., description="Block label")
    row: str = Field(..., description="Row numeral")
    column: str = Field(..., description="Column numeral")
    title: str = Field(..., min_length=1, max_length=512, description="Document title")
    category: str | None = Field(None, max_length=128, description="Category label")
    status: str = Field(DEFAULT_STATUS, min_length=1, max_length=64, description="Status label")
    description: str | None = Field(None, description="Free-text notes")
    metadata: dict = Field(default_factory=dict, description="Opaque document metadata")


class PaperResponse(BaseModel):
    """Response schema for an attached paper."""

    id: uuid.UUID
    document_id: uuid.UUID
    title: str
    content: str | None = None
    attachment_url: str | None = None
    file_type: str | None = None
    file_size: int | None = None
    created_at: datetime


class CreatePaperRequest(BaseModel):
    """Request schema for attaching a paper."""

    title: str = Field(..., min_length=1, max_length=512)
    content: str | None = None
    attachment_url: str | None = Field(None, max_length=1024)
    filename: str | None = Field(None, max_length=255, description="Used to derive the storage key")
    file_type: str | None = Field(None, max_length=32)
    file_size: int | None = Field(None, ge=0)


class DocumentResponse(BaseModel):
    """Response schema for document operations."""

    id: uuid.UUID
    section_id: uuid.UUID
    reference: str
    block: str
    row: str
    column: str
    title: str
    category: str | None = None
    status: str | None = None
    description: str | None = None
    metadata: dict
    created_by: uuid.UUID | None = None
    created_at: datetime
    updated_at: datetime


class DocumentDetailResponse(DocumentResponse):
    """Document with its papers."""

    papers: list[PaperResponse] = Field(default_factory=list)


class DashboardStatsResponse(BaseModel):
    """Aggregated archive counters."""

    total_documents: int
    documents_by_status: dict[str, int]
    custom_blocks: int
    sections: int
    open_reports: int
    pending_recommendations: int


class VocabularyResponse(BaseModel):
    """Category and status labels offered to uploaders."""

    categories: list[str]
    statuses: list[str]
    default_status: str


class FavoriteResponse(BaseModel):
    """Favorite state of a document for the caller after the request."""

    document_id: uuid.UUID
    is_favorited: bool
    changed: bool = Field(description="False when the request was a no-op")
