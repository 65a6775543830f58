# src/community_platform/main.py
"""Main entry point for the Community Platform application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from community_platform.api.v1 import (
    admin_router,
    auth_router,
    comment_votes_router,
    comments_router,
    communities_router,
    posts_router,
    reports_router,
    sessions_router,
    votes_router,
)
from community_platform.core.settings import settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging() -> None:
    """Install a root handler at the configured level.

    Called by the process entry point only; importing this module leaves
    the host application's logging untouched.
    """
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)


# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Community discussion platform API",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")
app.include_router(comment_votes_router, prefix="/api/v1")
app.include_router(communities_router, prefix="/api/v1")
app.include_router(sessions_router, prefix="/api/v1")
app.include_router(reports_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    configure_logging()
    logger.info("Starting %s on port 8000", settings.app_name)
    uvicorn.run("community_platform.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
