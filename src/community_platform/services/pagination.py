"""Offset pagination shared by every search endpoint."""
from __future__ import annotations

import math
from dataclasses import dataclass

from community_platform.core.settings import settings
from community_platform.schemas.common import MAX_PAGE, Pagination

DEFAULT_PAGE = 1
# Absolute page-size ceiling; settings may lower it but never raise it.
MAX_LIMIT = 100


def clamp_page(page: int | None) -> int:
    """Return a page number inside ``[1, MAX_PAGE]``; missing values become 1."""
    if page is None:
        return DEFAULT_PAGE
    return min(max(DEFAULT_PAGE, int(page)), MAX_PAGE)


def clamp_limit(limit: int | None) -> int:
    """Return a page size inside ``[1, min(search_max_limit, MAX_LIMIT)]``."""
    upper = max(1, min(int(settings.search_max_limit), MAX_LIMIT))
    if limit is None:
        limit = settings.search_default_limit
    return min(max(1, int(limit)), upper)


@dataclass(frozen=True)
class PageWindow:
    """Clamped page/limit pair for one request."""

    page: int
    limit: int

    @classmethod
    def from_request(cls, page: int | None, limit: int | None) -> PageWindow:
        """Build a window from raw request values."""
        return cls(page=clamp_page(page), limit=clamp_limit(limit))

    @property
    def skip(self) -> int:
        """Number of rows preceding this page."""
        return (self.page - 1) * self.limit


def build_pagination(window: PageWindow, total: int) -> Pagination:
    """Return the pagination envelope for ``total`` matching records.

    ``window.limit`` is never zero because of the clamping above.
    """
    return Pagination(
        current=window.page,
        limit=window.limit,
        records=total,
        pages=math.ceil(total / window.limit),
    )
