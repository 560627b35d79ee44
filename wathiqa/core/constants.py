"""
Archive vocabularies.

Document categories and statuses as used by the archive staff. The binder
stores them opaquely; these lists feed API defaults and dashboards.
"""

import enum

CATEGORIES: tuple[str, ...] = (
    "قانونية",
    "مالية",
    "إدارية",
    "مدنية",
    "جنائية",
    "تجارية",
    "أسرية",
)

STATUSES: tuple[str, ...] = (
    "نشط",
    "مؤرشف",
    "معلق",
    "يحتاج مراجعة",
)

DEFAULT_STATUS = STATUSES[0]


class CommentType(str, enum.Enum):
    GENERAL = "general"
    REVIEW = "review"
    SUGGESTION = "suggestion"
    QUESTION = "question"


class Priority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RecommendationStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    IMPLEMENTED = "implemented"


class ReportType(str, enum.Enum):
    ERROR = "error"
    IMPROVEMENT = "improvement"
    COMPLAINT = "complaint"
    SUGGESTION = "suggestion"


class Severity(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ReportStatus(str, enum.Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class ActivityAction(str, enum.Enum):
    SESSION_OPENED = "session_opened"
    BLOCK_REGISTERED = "block_registered"
    DOCUMENT_FILED = "document_filed"
    FAVORITE_ADDED = "favorite_added"
    FAVORITE_REMOVED = "favorite_removed"
