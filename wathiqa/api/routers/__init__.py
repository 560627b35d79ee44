"""API routers."""

from .addresses import router as addresses_router
from .annotations import comments_router, recommendations_router, reports_router
from .blocks import router as blocks_router
from .dashboard import router as dashboard_router
from .documents import router as documents_router
from .health import router as health_router
from .users import router as users_router
from .users import sessions_router

__all__ = [
    "addresses_router",
    "blocks_router",
    "comments_router",
    "dashboard_router",
    "documents_router",
    "health_router",
    "recommendations_router",
    "reports_router",
    "sessions_router",
    "users_router",
]
