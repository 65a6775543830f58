# src/community_platform/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
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

__all__ = [
    "auth_router",
    "posts_router",
    "votes_router",
    "comments_router",
    "comment_votes_router",
    "communities_router",
    "sessions_router",
    "reports_router",
    "admin_router",
]
