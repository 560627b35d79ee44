"""Service orchestrators."""

from .activity_service import ActivityService
from .allocation_service import AllocationService
from .annotation_service import CommentService, ProblemReportService, RecommendationService
from .block_service import BlockService
from .document_service import DocumentService
from .errors import commit_changes
from .favorite_service import FavoriteService
from .paper_service import PaperService
from .user_service import UserService

__all__ = [
    "ActivityService",
    "AllocationService",
    "BlockService",
    "CommentService",
    "DocumentService",
    "FavoriteService",
    "PaperService",
    "ProblemReportService",
    "RecommendationService",
    "UserService",
    "commit_changes",
]
