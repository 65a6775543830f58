# src/community_platform/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .auth import router as auth_router
from .comment_votes import router as comment_votes_router
from .comments import router as comments_router
from .communities import router as communities_router
from .posts import router as posts_router
from .reports import router as reports_router
from .sessions import router as sessions_router
from .votes import router as votes_router

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
