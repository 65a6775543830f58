"""Administrative endpoints: content erasure, report review and audit log search."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from community_platform.api.v1.dependencies import CurrentAdminDep, SessionDep
from community_platform.db.time import as_utc, utcnow
from community_platform.models import AuditLog, ContentReport
from community_platform.schemas.audit import AuditLogPage, AuditLogResponse, AuditLogSearchRequest
from community_platform.schemas.report import (
    ReportPage,
    ReportResponse,
    ReportReview,
    ReportSearchRequest,
)
from community_platform.services.audit import EVENT_COMMENT_ERASE, EVENT_POST_ERASE, record_event
from community_platform.services.comment_tree import soft_delete_thread
from community_platform.services.pagination import PageWindow, build_pagination
from community_platform.services.reports import ReportStateError, review_report

from .comments import get_comment_or_404
from .posts import get_post_or_404
from .reports import get_report_or_404

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.delete("/posts/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def erase_post(post_id: str, current_admin: CurrentAdminDep, db: SessionDep) -> None:
    """Soft-delete any post on behalf of the platform."""
    post = get_post_or_404(db, post_id)
    post.deleted_at = utcnow()
    record_event(
        db,
        EVENT_POST_ERASE,
        actor_admin_id=current_admin.id,
        detail=f"Erased post {post_id}",
    )
    db.commit()
    logger.info("Admin %s erased post %s", current_admin.id, post_id)


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def erase_comment(comment_id: str, current_admin: CurrentAdminDep, db: SessionDep) -> None:
    """Soft-delete any comment and its replies on behalf of the platform."""
    comment = get_comment_or_404(db, comment_id)
    erased = soft_delete_thread(db, comment)
    record_event(
        db,
        EVENT_COMMENT_ERASE,
        actor_admin_id=current_admin.id,
        detail=f"Erased comment {comment_id} ({erased} total)",
    )
    db.commit()
    logger.info("Admin %s erased comment %s and %d replies", current_admin.id, comment_id, erased - 1)


@router.patch("/audit-logs", response_model=AuditLogPage)
async def search_audit_logs(
    payload: AuditLogSearchRequest,
    _current_admin: CurrentAdminDep,
    db: SessionDep,
) -> AuditLogPage:
    """Search the audit trail, newest first."""
    query = db.query(AuditLog)
    if payload.event_type:
        query = query.filter(AuditLog.event_type == payload.event_type)
    if payload.actor_member_id is not None:
        query = query.filter(AuditLog.actor_member_id == payload.actor_member_id)
    if payload.actor_admin_id is not None:
        query = query.filter(AuditLog.actor_admin_id == payload.actor_admin_id)
    if payload.created_from is not None:
        query = query.filter(AuditLog.created_at >= as_utc(payload.created_from))
    if payload.created_to is not None:
        query = query.filter(AuditLog.created_at <= as_utc(payload.created_to))

    window = PageWindow.from_request(payload.page, payload.limit)
    total = query.count()
    rows = (
        query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        .offset(window.skip)
        .limit(window.limit)
        .all()
    )
    return AuditLogPage(
        pagination=build_pagination(window, total),
        data=[AuditLogResponse.model_validate(row) for row in rows],
    )


@router.patch("/reports", response_model=ReportPage)
async def search_reports(
    payload: ReportSearchRequest,
    _current_admin: CurrentAdminDep,
    db: SessionDep,
) -> ReportPage:
    """Search the report queue, oldest first so the backlog drains in order."""
    query = db.query(ContentReport).filter(ContentReport.deleted_at.is_(None))
    if payload.status is not None:
        query = query.filter(ContentReport.status == payload.status)
    if payload.target == "post":
        query = query.filter(ContentReport.post_id.is_not(None))
    elif payload.target == "comment":
        query = query.filter(ContentReport.comment_id.is_not(None))
    if payload.post_id is not None:
        query = query.filter(ContentReport.post_id == payload.post_id)
    if payload.comment_id is not None:
        query = query.filter(ContentReport.comment_id == payload.comment_id)
    if payload.reporter_member_id is not None:
        query = query.filter(ContentReport.reporter_member_id == payload.reporter_member_id)

    window = PageWindow.from_request(payload.page, payload.limit)
    total = query.count()
    rows = (
        query.order_by(ContentReport.created_at.asc(), ContentReport.id.asc())
        .offset(window.skip)
        .limit(window.limit)
        .all()
    )
    return ReportPage(
        pagination=build_pagination(window, total),
        data=[ReportResponse.model_validate(row) for row in rows],
    )


@router.get("/reports/{report_id}", response_model=ReportResponse)
async def get_report(
    report_id: str,
    _current_admin: CurrentAdminDep,
    db: SessionDep,
) -> ContentReport:
    """Get one report."""
    return get_report_or_404(db, report_id)


@router.put("/reports/{report_id}", response_model=ReportResponse)
async def update_report(
    report_id: str,
    review: ReportReview,
    current_admin: CurrentAdminDep,
    db: SessionDep,
) -> ContentReport:
    """Move a report through review; closed reports cannot be reopened."""
    report = get_report_or_404(db, report_id)
    try:
        review_report(db, report, current_admin.id, review)
    except ReportStateError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    db.commit()
    db.refresh(report)
    return report
