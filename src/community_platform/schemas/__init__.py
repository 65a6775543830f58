"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .audit import AuditLogPage, AuditLogResponse, AuditLogSearchRequest
from .auth import (
    AuthorizedResponse,
    JoinRequest,
    LoginRequest,
    RefreshRequest,
    SessionPage,
    SessionResponse,
    TokenResponse,
)
from .comment import CommentCreate, CommentPage, CommentResponse, CommentSearchRequest, CommentUpdate
from .common import Pagination
from .community import (
    CommunityCreate,
    CommunityPage,
    CommunityResponse,
    CommunityRuleResponse,
    CommunityRuleWrite,
    CommunitySearchRequest,
    MembershipResponse,
)
from .post import (
    PostCreate,
    PostResponse,
    PostSearchRequest,
    PostSummary,
    PostSummaryPage,
    PostUpdate,
)
from .report import ReportCreate, ReportPage, ReportResponse, ReportReview, ReportSearchRequest
from .vote import CommentVoteResponse, VoteCreate, VoteResponse

__all__ = [
    "AuditLogPage", "AuditLogResponse", "AuditLogSearchRequest",
    "AuthorizedResponse", "JoinRequest", "LoginRequest", "RefreshRequest",
    "SessionPage", "SessionResponse", "TokenResponse",
    "CommentCreate", "CommentPage", "CommentResponse", "CommentSearchRequest", "CommentUpdate",
    "Pagination",
    "CommunityCreate", "CommunityPage", "CommunityResponse", "CommunityRuleResponse",
    "CommunityRuleWrite", "CommunitySearchRequest",
    "MembershipResponse",
    "PostCreate", "PostResponse", "PostSearchRequest", "PostSummary", "PostSummaryPage",
    "PostUpdate",
    "ReportCreate", "ReportPage", "ReportResponse", "ReportReview", "ReportSearchRequest",
    "CommentVoteResponse", "VoteCreate", "VoteResponse",
]
