# src/community_platform/models/__init__.py
"""SQLAlchemy models for the Community Platform application."""

from .audit import AuditLog
from .comment import Comment
from .community import Community, CommunityMembership, CommunityRule
from .post import Post
from .report import ContentReport
from .session import UserSession
from .user import AdminUser, MemberUser, UserCredential
from .vote import CommentVote, PostVote

__all__ = [
    "AuditLog",
    "Comment",
    "Community", "CommunityMembership", "CommunityRule",
    "Post",
    "ContentReport",
    "UserSession",
    "AdminUser", "MemberUser", "UserCredential",
    "CommentVote", "PostVote",
]
