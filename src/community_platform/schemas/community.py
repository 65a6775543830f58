# src/community_platform/schemas/community.py
"""Community-related Pydantic schemas."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from community_platform.schemas.common import MAX_PAGE, Pagination

COMMUNITY_NAME_PATTERN = re.compile(r"^[-A-Za-z0-9_]{5,32}$")


class CommunityCreate(BaseModel):
    """Schema for creating a new community."""

    name: str
    description: str | None = Field(None, max_length=2000)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Names are 5-32 characters of letters, digits, hyphen or underscore."""
        if not COMMUNITY_NAME_PATTERN.match(v):
            raise ValueError(
                "Community name must be 5-32 characters, alphanumeric, hyphen, or underscore only"
            )
        return v


class CommunitySearchRequest(BaseModel):
    """Filters for listing communities."""

    name: str | None = Field(None, description="Case-insensitive substring of the name")
    owner_id: str | None = None
    page: int | None = Field(None, le=MAX_PAGE)
    limit: int | None = None


class CommunityResponse(BaseModel):
    """Schema for community information returned by the API."""

    id: str
    name: str
    description: str | None
    owner_member_id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommunityPage(BaseModel):
    """Paginated community search response."""

    pagination: Pagination
    data: list[CommunityResponse]


class MembershipResponse(BaseModel):
    """Membership row returned after joining a community."""

    id: str
    community_id: str
    member_id: str
    joined_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommunityRuleWrite(BaseModel):
    """Body for adding or rewording a community rule."""

    rule_text: str = Field(..., min_length=1, max_length=200)


class CommunityRuleResponse(BaseModel):
    """Community rule returned by the API."""

    id: str
    community_id: str
    rule_index: int
    rule_text: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
