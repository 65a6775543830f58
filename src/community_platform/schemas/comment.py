"""Comment-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from community_platform.schemas.common import MAX_PAGE, Pagination


class CommentSearchRequest(BaseModel):
    """Filters for listing comments."""

    post_id: str | None = None
    author_id: str | None = None
    query: str | None = Field(
        None, description="Case-insensitive substring of the body, matched as given"
    )
    created_from: datetime | None = None
    created_to: datetime | None = None
    sort_by: Literal["newest", "oldest", "score"] = Field(
        "newest", description="newest, oldest, or score (net votes, then newest)"
    )
    page: int | None = Field(None, le=MAX_PAGE)
    limit: int | None = None


class CommentCreate(BaseModel):
    """Schema for creating a comment."""

    post_id: str
    parent_comment_id: str | None = None
    body: str = Field(..., min_length=1, max_length=10000)


class CommentUpdate(BaseModel):
    """Schema for editing a comment body."""

    body: str = Field(..., min_length=1, max_length=10000)


class CommentResponse(BaseModel):
    """Comment returned by the API."""

    id: str
    post_id: str
    parent_comment_id: str | None
    author_member_id: str
    body: str
    edited: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommentPage(BaseModel):
    """Paginated comment search response."""

    pagination: Pagination
    data: list[CommentResponse]
