"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, wathiqa.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wathiqa import __version__
from wathiqa.boundary.db import get_async_engine
from wathiqa.configs import get_settings
from wathiqa.observability import configure_logging
from wathiqa.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    addresses_router,
    blocks_router,
    comments_router,
    dashboard_router,
    documents_router,
    health_router,
    recommendations_router,
    reports_router,
    sessions_router,
    users_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging on startup and disposes the engine pool on shutdown.
    """
    configure_logging(get_settings().log_level)
    logger = logging.getLogger("uvicorn")
    logger.info("Archive API starting", extra={"environment": get_settings().environment})

    yield

    await get_async_engine().dispose()
    logger.info("Database engine disposed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Wathiqa Archive API",
        description="Legal document archive addressed by block, row and column",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Observability
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    for router in (
        health_router,
        blocks_router,
        addresses_router,
        documents_router,
        users_router,
        sessions_router,
        comments_router,
        recommendations_router,
        reports_router,
        dashboard_router,
    ):
        app.include_router(router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "wathiqa.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
