# src/community_platform/schemas/vote.py
"""Vote-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

VoteState = Literal["upvote", "downvote", "none"]


class VoteCreate(BaseModel):
    """Schema for casting or changing a vote."""

    vote_state: VoteState = Field(..., description="upvote, downvote, or none to withdraw")


class VoteResponse(BaseModel):
    """Vote row returned by the API."""

    id: str
    post_id: str
    voter_member_id: str
    vote_state: VoteState
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommentVoteResponse(BaseModel):
    """Comment vote row returned by the API."""

    id: str
    comment_id: str
    voter_member_id: str
    vote_state: VoteState
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
