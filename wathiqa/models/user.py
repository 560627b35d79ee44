"""
User and access session schemas.

Dependencies: pydantic, wathiqa.core.access
System role: User management API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from wathiqa.core.access import Role


class CreateUserRequest(BaseModel):
    """Request schema for creating a staff account."""

    username: str = Field(..., min_length=1, max_length=150)
    email: str = Field(..., min_length=3, max_length=255)
    full_name: str = Field(..., min_length=1, max_length=255)
    role: Role = Role.VIEWER


class UpdateRoleRequest(BaseModel):
    """Request schema for changing a role."""

    role: Role


class RestrictUserRequest(BaseModel):
    """Request schema for locking or unlocking an account."""

    restrict: bool = True
    reason: str | None = Field(None, max_length=1024)


class UserResponse(BaseModel):
    """Response schema for a user."""

    id: uuid.UUID
    username: str
    email: str
    full_name: str
    role: Role
    is_active: bool
    is_restricted: bool
    restriction_reason: str | None = None
    restricted_at: datetime | None = None
    restricted_by: uuid.UUID | None = None
    created_at: datetime


class OpenSessionRequest(BaseModel):
    """Request schema for opening an access session."""

    user_id: uuid.UUID


class CapabilitiesResponse(BaseModel):
    can_upload: bool
    can_manage_blocks: bool
    can_annotate: bool
    can_review: bool
    can_manage_users: bool


class AccessSessionResponse(BaseModel):
    """Opened session with resolved capabilities."""

    user_id: uuid.UUID
    role: Role
    capabilities: CapabilitiesResponse
    issued_at: datetime
    expires_at: datetime
    is_restricted: bool
    restriction_reason: str | None = None


class ActivityResponse(BaseModel):
    """One entry of a user's activity trail."""

    id: uuid.UUID
    user_id: uuid.UUID
    action: str
    resource_type: str | None = None
    resource_id: str | None = None
    details: dict = Field(default_factory=dict)
    created_at: datetime
