"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - ORM models for blocks, sections, documents, papers, users and annotations
  - CRUD singletons for each model

Dependencies: sqlalchemy, wathiqa.configs
System role: Database adapter providing persistent storage for the archive
"""

from wathiqa.boundary.db.base import Base, TimestampMixin, UUIDMixin
from wathiqa.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from wathiqa.boundary.db.models import (
    CommentModel,
    CustomBlockModel,
    DocumentModel,
    PaperModel,
    ProblemReportModel,
    RecommendationModel,
    SectionModel,
    UserModel,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "CustomBlockModel",
    "SectionModel",
    "DocumentModel",
    "PaperModel",
    "UserModel",
    "CommentModel",
    "RecommendationModel",
    "ProblemReportModel",
]
