"""
Block and address schemas.

Labels are plain strings here; format rules are enforced by the address
model so that every caller gets the same InvalidFormat error.

Dependencies: pydantic
System role: Block catalog and allocation API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class RegisterBlockRequest(BaseModel):
    """Request schema for registering a custom block."""

    label: str = Field(..., description="1-3 uppercase letters, not a single fixed letter")


class BlockCatalogResponse(BaseModel):
    """Fixed and custom block labels."""

    fixed: list[str]
    custom: list[str]


class AllocateAddressRequest(BaseModel):
    """Request schema for allocating an address."""

    block: str = Field(..., description="Block label")
    row: str = Field(..., description="Row numeral, 1-3 digits")
    column: str = Field(..., description="Column numeral, 1-3 digits")


class AddressResponse(BaseModel):
    """Allocated address and its resolved section."""

    reference: str
    block: str
    row: str
    column: str
    section_id: uuid.UUID


class RowListResponse(BaseModel):
    """Rows that have sections allocated under a block."""

    block: str
    rows: list[str]


class SectionResponse(BaseModel):
    """An allocated section."""

    id: uuid.UUID
    reference: str
    block: str
    row: str
    column: str
    created_at: datetime
