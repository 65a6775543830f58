"""Helpers for appending audit log entries."""
from __future__ import annotations

from sqlalchemy.orm import Session

from community_platform.models import AuditLog

EVENT_MEMBER_JOIN = "member_join"
EVENT_ADMIN_JOIN = "admin_join"
EVENT_SESSION_LOGIN = "session_login"
EVENT_SESSION_REFRESH = "session_refresh"
EVENT_SESSION_REVOKE = "session_revoke"
EVENT_POST_ERASE = "post_erase"
EVENT_COMMENT_ERASE = "comment_erase"
EVENT_REPORT_FILE = "report_file"
EVENT_REPORT_WITHDRAW = "report_withdraw"
EVENT_REPORT_REVIEW = "report_review"


def record_event(
    db: Session,
    event_type: str,
    *,
    actor_member_id: str | None = None,
    actor_admin_id: str | None = None,
    detail: str | None = None,
) -> AuditLog:
    """Stage an audit entry in the current transaction; the caller commits."""
    entry = AuditLog(
        actor_member_id=actor_member_id,
        actor_admin_id=actor_admin_id,
        event_type=event_type,
        event_detail=detail,
    )
    db.add(entry)
    return entry
