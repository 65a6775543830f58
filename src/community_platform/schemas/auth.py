"""Authentication-related Pydantic schemas."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from community_platform.schemas.common import Pagination

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class JoinRequest(BaseModel):
    """Registration payload shared by members and admins."""

    email: str = Field(..., max_length=320)
    password: str = Field(..., min_length=8, max_length=128)
    display_name: str | None = Field(None, min_length=1, max_length=100)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Require a plausible address and normalize its case."""
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Email address is not valid")
        return v.lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        """Passwords need at least one letter and one digit."""
        if not re.search(r"[A-Za-z]", v) or not re.search(r"\d", v):
            raise ValueError("Password must contain at least one letter and one digit")
        return v


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Compare addresses case-insensitively."""
        return v.lower()


class RefreshRequest(BaseModel):
    """Refresh token exchange request."""

    refresh_token: str


class TokenResponse(BaseModel):
    """JWT pair issued to an authenticated principal."""

    access: str = Field(..., description="Bearer access token")
    refresh: str = Field(..., description="Refresh token for /refresh")
    expired_at: datetime
    refreshable_until: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthorizedResponse(BaseModel):
    """Principal identity plus its freshly issued tokens."""

    id: str
    display_name: str | None
    status: str
    created_at: datetime
    token: TokenResponse


class SessionResponse(BaseModel):
    """Live refresh session belonging to the caller."""

    id: str
    issued_at: datetime
    expires_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SessionPage(BaseModel):
    """Paginated list of the caller's live sessions."""

    pagination: Pagination
    data: list[SessionResponse]
