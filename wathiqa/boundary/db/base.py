"""
SQLAlchemy declarative base and archive mixins.

Constraint names follow a fixed convention so that the unique keys the
archive relies on (section reference, custom block label, one favorite
per user and document) get the same name on PostgreSQL and SQLite.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, MetaData, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def utcnow() -> datetime:
    """Timezone-aware current time used for every archive timestamp."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base; every archive table registers on its metadata."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={getattr(self, 'id', None)}>"


class UUIDMixin:
    """UUID v4 primary key, generated client-side so ids exist before flush."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
    )


class CreatedAtMixin:
    """Creation timestamp for append-only rows (activity entries, favorites)."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
    )


class TimestampMixin(CreatedAtMixin):
    """
    Creation and modification timestamps.

    created_at never changes; updated_at is refreshed on every ORM or
    Core UPDATE through the onupdate hook.
    """

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
