"""Session management endpoints for members."""

from fastapi import APIRouter, HTTPException, Query, status

from community_platform.api.v1.dependencies import CurrentMemberDep, SessionDep
from community_platform.db.time import utcnow
from community_platform.models import UserSession
from community_platform.models.session import PRINCIPAL_MEMBER
from community_platform.schemas.auth import SessionPage, SessionResponse
from community_platform.schemas.common import MAX_PAGE
from community_platform.services.audit import EVENT_SESSION_REVOKE, record_event
from community_platform.services.pagination import PageWindow, build_pagination

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("", response_model=SessionPage)
async def list_my_sessions(
    current_member: CurrentMemberDep,
    db: SessionDep,
    page: int | None = Query(None, le=MAX_PAGE, description="1-based page number"),
    limit: int | None = Query(None, description="Page size (max 100)"),
) -> SessionPage:
    """List the caller's unrevoked, unexpired sessions, newest first."""
    query = db.query(UserSession).filter(
        UserSession.principal_type == PRINCIPAL_MEMBER,
        UserSession.principal_id == current_member.id,
        UserSession.revoked_at.is_(None),
        UserSession.expires_at > utcnow(),
    )
    window = PageWindow.from_request(page, limit)
    total = query.count()
    rows = (
        query.order_by(UserSession.issued_at.desc(), UserSession.id.desc())
        .offset(window.skip)
        .limit(window.limit)
        .all()
    )
    return SessionPage(
        pagination=build_pagination(window, total),
        data=[SessionResponse.model_validate(row) for row in rows],
    )


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_session(
    session_id: str,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> None:
    """Revoke one of the caller's sessions so its refresh token stops working."""
    session = db.query(UserSession).filter(
        UserSession.id == session_id,
        UserSession.principal_type == PRINCIPAL_MEMBER,
        UserSession.principal_id == current_member.id,
        UserSession.revoked_at.is_(None),
    ).first()
    if session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")

    session.revoked_at = utcnow()
    record_event(
        db,
        EVENT_SESSION_REVOKE,
        actor_member_id=current_member.id,
        detail=f"Revoked session {session_id}",
    )
    db.commit()
