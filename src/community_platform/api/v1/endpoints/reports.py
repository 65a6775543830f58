"""Member endpoints for reporting posts and comments."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.orm import Session

from community_platform.api.v1.dependencies import CurrentMemberDep, SessionDep
from community_platform.models import ContentReport
from community_platform.schemas.report import ReportCreate, ReportResponse
from community_platform.services.reports import (
    DuplicateReport,
    ReportStateError,
    file_report,
    withdraw_report,
)

from .comments import get_comment_or_404
from .posts import get_post_or_404

router = APIRouter(tags=["reports"])


def get_report_or_404(db: Session, report_id: str) -> ContentReport:
    """Return an unwithdrawn report or raise 404."""
    report = db.query(ContentReport).filter(
        ContentReport.id == report_id,
        ContentReport.deleted_at.is_(None),
    ).first()
    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Report not found")
    return report


def _file(db: Session, member_id: str, payload: ReportCreate, **target: str) -> ContentReport:
    try:
        report = file_report(db, member_id, payload, **target)
    except DuplicateReport as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    db.commit()
    db.refresh(report)
    return report


@router.post(
    "/posts/{post_id}/reports",
    response_model=ReportResponse,
    status_code=status.HTTP_201_CREATED,
)
async def report_post(
    post_id: str,
    payload: ReportCreate,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> ContentReport:
    """Report a live post; one live report per member and post."""
    post = get_post_or_404(db, post_id)
    return _file(db, current_member.id, payload, post_id=post.id)


@router.post(
    "/comments/{comment_id}/reports",
    response_model=ReportResponse,
    status_code=status.HTTP_201_CREATED,
)
async def report_comment(
    comment_id: str,
    payload: ReportCreate,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> ContentReport:
    """Report a live comment; one live report per member and comment."""
    comment = get_comment_or_404(db, comment_id)
    return _file(db, current_member.id, payload, comment_id=comment.id)


@router.delete("/reports/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
async def withdraw_my_report(
    report_id: str,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> None:
    """Withdraw one of the caller's reports while it is still open."""
    report = get_report_or_404(db, report_id)
    if report.reporter_member_id != current_member.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Report not found")
    try:
        withdraw_report(db, report)
    except ReportStateError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    db.commit()
