"""Filing, withdrawing and reviewing content reports."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from community_platform.db.time import utcnow
from community_platform.models import ContentReport
from community_platform.models.report import (
    CLOSED_REPORT_STATUSES,
    REPORT_STATUS_OPEN,
)
from community_platform.schemas.report import ReportCreate, ReportReview
from community_platform.services.audit import (
    EVENT_REPORT_FILE,
    EVENT_REPORT_REVIEW,
    EVENT_REPORT_WITHDRAW,
    record_event,
)

logger = logging.getLogger(__name__)


class DuplicateReport(ValueError):
    """The member already has a live report on this target."""


class ReportStateError(ValueError):
    """The requested change is not allowed from the report's current status."""


def _target(report: ContentReport) -> str:
    if report.post_id is not None:
        return f"post {report.post_id}"
    return f"comment {report.comment_id}"


def find_live_report(
    db: Session,
    reporter_member_id: str,
    *,
    post_id: str | None = None,
    comment_id: str | None = None,
) -> ContentReport | None:
    """Return the member's unwithdrawn report on the target, if any."""
    stmt = select(ContentReport).where(
        ContentReport.reporter_member_id == reporter_member_id,
        ContentReport.deleted_at.is_(None),
    )
    if post_id is not None:
        stmt = stmt.where(ContentReport.post_id == post_id)
    else:
        stmt = stmt.where(ContentReport.comment_id == comment_id)
    return db.execute(stmt.limit(1)).scalars().first()


def file_report(
    db: Session,
    reporter_member_id: str,
    payload: ReportCreate,
    *,
    post_id: str | None = None,
    comment_id: str | None = None,
) -> ContentReport:
    """Stage a new open report on exactly one post or comment.

    Args:
        db: Active session; the caller commits.
        reporter_member_id: Member filing the report.
        payload: Report type and optional reason.
        post_id: Reported post, mutually exclusive with ``comment_id``.
        comment_id: Reported comment.

    Returns:
        The staged, flushed report.

    Raises:
        DuplicateReport: The member already has a live report on the target.
    """
    if (post_id is None) == (comment_id is None):
        raise ValueError("exactly one of post_id and comment_id is required")
    if find_live_report(db, reporter_member_id, post_id=post_id, comment_id=comment_id):
        raise DuplicateReport("You have already reported this content")

    now = utcnow()
    report = ContentReport(
        post_id=post_id,
        comment_id=comment_id,
        reporter_member_id=reporter_member_id,
        report_type=payload.report_type,
        reason=payload.reason,
        status=REPORT_STATUS_OPEN,
        created_at=now,
        updated_at=now,
    )
    db.add(report)
    db.flush()
    record_event(
        db,
        EVENT_REPORT_FILE,
        actor_member_id=reporter_member_id,
        detail=f"Reported {_target(report)} as {payload.report_type}",
    )
    return report


def withdraw_report(db: Session, report: ContentReport) -> None:
    """Soft-delete a report that no admin has picked up yet."""
    if report.status != REPORT_STATUS_OPEN:
        raise ReportStateError("Only open reports can be withdrawn")
    report.deleted_at = utcnow()
    record_event(
        db,
        EVENT_REPORT_WITHDRAW,
        actor_member_id=report.reporter_member_id,
        detail=f"Withdrew report {report.id}",
    )


def review_report(
    db: Session,
    report: ContentReport,
    admin_id: str,
    review: ReportReview,
) -> ContentReport:
    """Apply an admin decision to a report.

    Closed reports keep their status; notes may still be amended.
    ``resolved_at`` is stamped on closing and cleared on any open status.

    Raises:
        ReportStateError: The review would reopen a closed report.
    """
    if report.status in CLOSED_REPORT_STATUSES and review.status != report.status:
        raise ReportStateError(f"Report is already {report.status}")

    now = utcnow()
    if review.status in CLOSED_REPORT_STATUSES:
        if report.status not in CLOSED_REPORT_STATUSES:
            report.resolved_at = now
    else:
        report.resolved_at = None
    report.status = review.status
    if review.resolution_notes is not None:
        report.resolution_notes = review.resolution_notes
    report.reviewer_admin_id = admin_id
    report.updated_at = now

    record_event(
        db,
        EVENT_REPORT_REVIEW,
        actor_admin_id=admin_id,
        detail=f"Marked report {report.id} on {_target(report)} {review.status}",
    )
    logger.info("Admin %s marked report %s %s", admin_id, report.id, review.status)
    return report
