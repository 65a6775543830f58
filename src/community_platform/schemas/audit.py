"""Audit log schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from community_platform.schemas.common import MAX_PAGE, Pagination


class AuditLogSearchRequest(BaseModel):
    """Filters for the admin audit log search."""

    event_type: str | None = None
    actor_member_id: str | None = None
    actor_admin_id: str | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None
    page: int | None = Field(None, le=MAX_PAGE)
    limit: int | None = None


class AuditLogResponse(BaseModel):
    """Audit log row."""

    id: str
    actor_member_id: str | None
    actor_admin_id: str | None
    event_type: str
    event_detail: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuditLogPage(BaseModel):
    """Paginated audit log response."""

    pagination: Pagination
    data: list[AuditLogResponse]
