# src/community_platform/services/__init__.py
"""Business logic services for the Community Platform."""

from .comment_tree import soft_delete_thread
from .pagination import PageWindow, build_pagination
from .post_search import InvalidSearchQuery, search_posts
from .reports import DuplicateReport, ReportStateError, file_report, review_report

__all__ = [
    "DuplicateReport",
    "InvalidSearchQuery",
    "PageWindow",
    "ReportStateError",
    "build_pagination",
    "file_report",
    "review_report",
    "search_posts",
    "soft_delete_thread",
]
