"""Post-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from community_platform.schemas.common import MAX_PAGE, Pagination

PostSortBy = Literal["newest", "top", "created_at", "updated_at", "title"]


class PostSearchRequest(BaseModel):
    """Filtering, sorting and pagination options for the post search."""

    community_id: str | None = Field(None, description="Restrict to one community")
    author_ids: list[str] | None = Field(
        None,
        validation_alias=AliasChoices("author_ids", "author_id"),
        description="Restrict to posts written by any of these members",
    )
    query: str | None = Field(
        None,
        validation_alias=AliasChoices("query", "keyword"),
        description="Case-insensitive substring of title or body (at least 2 characters)",
    )
    min_date: datetime | None = Field(None, description="Inclusive lower bound on created_at")
    max_date: datetime | None = Field(None, description="Inclusive upper bound on created_at")
    sort_by: PostSortBy = Field(
        "newest",
        validation_alias=AliasChoices("sort_by", "sort_order"),
        description="newest (default), top, or an explicit column",
    )
    order: Literal["asc", "desc"] = Field("desc", description="Direction for column sorts")
    page: int | None = Field(
        None, le=MAX_PAGE, description="1-based page number, coerced to >= 1"
    )
    limit: int | None = Field(None, description="Page size, coerced into [1, 100]")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("author_ids", mode="before")
    @classmethod
    def wrap_single_author(cls, v: object) -> object:
        """Accept one author id as well as a list of them."""
        if isinstance(v, str):
            return [v]
        return v


class PostSummary(BaseModel):
    """Row of a post search result."""

    id: str
    community_id: str
    title: str
    author_display_name: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PostSummaryPage(BaseModel):
    """Paginated post search response."""

    pagination: Pagination
    data: list[PostSummary]


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    community_id: str
    title: str = Field(..., min_length=1, max_length=300)
    body: str = Field(..., min_length=1, max_length=40000)
    author_display_name: str | None = Field(None, max_length=100)


class PostUpdate(BaseModel):
    """Partial update of a post; omitted fields are left untouched."""

    title: str | None = Field(None, min_length=1, max_length=300)
    body: str | None = Field(None, min_length=1, max_length=40000)
    author_display_name: str | None = Field(None, max_length=100)


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: str
    community_id: str
    author_member_id: str | None
    author_display_name: str | None
    title: str
    body: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
