"""
User ORM model.

Archive staff accounts. Credentials are held by the external identity
provider; this table carries role and restriction state only.

Dependencies: sqlalchemy, wathiqa.boundary.db.base, wathiqa.core.access
System role: User persistence for role-based access
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from wathiqa.boundary.db.base import Base, UUIDMixin, TimestampMixin
from wathiqa.core.access import Role


class UserModel(Base, UUIDMixin, TimestampMixin):
    """
    User ORM model.

    Attributes:
        username: Unique login name
        email: Contact address
        full_name: Display name
        role: admin / archivist / viewer
        is_active: False once the account is deactivated
        is_restricted: Account locked by an administrator
        restriction_reason: Why the account was locked
        restricted_at: When the lock was applied
        restricted_by: Administrator who applied the lock
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[Role] = mapped_column(
        Enum(Role, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=Role.VIEWER,
    )

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_restricted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    restriction_reason: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    restricted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    restricted_by: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
