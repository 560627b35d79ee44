"""
Database models package.

Exports:
  - CustomBlockModel: Registered custom block labels
  - SectionModel: Canonical address to section binding
  - DocumentModel, PaperModel: Filed documents and their attachments
  - UserModel: Staff accounts with role and restriction state
  - CommentModel, RecommendationModel, ProblemReportModel: Annotations
  - FavoriteModel: Per-user document bookmarks
  - ActivityLogModel: User activity trail

Dependencies: sqlalchemy, wathiqa.boundary.db.base
System role: Database model definitions for domain entities
"""

from wathiqa.boundary.db.models.block_model import CustomBlockModel
from wathiqa.boundary.db.models.section_model import SectionModel
from wathiqa.boundary.db.models.document_model import DocumentModel
from wathiqa.boundary.db.models.paper_model import PaperModel
from wathiqa.boundary.db.models.user_model import UserModel
from wathiqa.boundary.db.models.annotation_model import (
    CommentModel,
    ProblemReportModel,
    RecommendationModel,
)
from wathiqa.boundary.db.models.favorite_model import FavoriteModel
from wathiqa.boundary.db.models.activity_model import ActivityLogModel

__all__ = [
    "CustomBlockModel",
    "SectionModel",
    "DocumentModel",
    "PaperModel",
    "UserModel",
    "CommentModel",
    "RecommendationModel",
    "ProblemReportModel",
    "FavoriteModel",
    "ActivityLogModel",
]
