"""Schemas for content reports and their admin review."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from community_platform.schemas.common import MAX_PAGE, Pagination

ReportStatus = Literal["open", "reviewing", "resolved", "dismissed"]


class ReportCreate(BaseModel):
    """Body of a member's report."""

    report_type: str = Field(..., min_length=1, max_length=64, description="e.g. spam, abuse")
    reason: str | None = Field(None, max_length=2000)


class ReportReview(BaseModel):
    """Admin decision applied to a report."""

    status: ReportStatus
    resolution_notes: str | None = Field(None, max_length=2000)


class ReportSearchRequest(BaseModel):
    """Filters for the admin report queue."""

    status: ReportStatus | None = None
    target: Literal["post", "comment"] | None = None
    post_id: str | None = None
    comment_id: str | None = None
    reporter_member_id: str | None = None
    page: int | None = Field(None, le=MAX_PAGE)
    limit: int | None = None


class ReportResponse(BaseModel):
    """Report returned by the API."""

    id: str
    post_id: str | None
    comment_id: str | None
    reporter_member_id: str
    report_type: str
    reason: str | None
    status: ReportStatus
    reviewer_admin_id: str | None
    resolution_notes: str | None
    resolved_at: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReportPage(BaseModel):
    """Paginated report search response."""

    pagination: Pagination
    data: list[ReportResponse]
