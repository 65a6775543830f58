# src/community_platform/api/v1/endpoints/auth.py
"""Authentication endpoints for the Community Platform API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.orm import Session

from community_platform.api.v1.dependencies import SessionDep
from community_platform.core.security import (
    IssuedTokens,
    PrincipalType,
    TokenError,
    decode_token,
    hash_password,
    issue_tokens,
    verify_password,
)
from community_platform.db.ids import new_id
from community_platform.db.time import as_utc, utcnow
from community_platform.models import AdminUser, MemberUser, UserCredential, UserSession
from community_platform.schemas.auth import (
    AuthorizedResponse,
    JoinRequest,
    LoginRequest,
    RefreshRequest,
    TokenResponse,
)
from community_platform.services.audit import (
    EVENT_ADMIN_JOIN,
    EVENT_MEMBER_JOIN,
    EVENT_SESSION_LOGIN,
    EVENT_SESSION_REFRESH,
    record_event,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])

Principal = MemberUser | AdminUser
PRINCIPAL_MODELS: dict[PrincipalType, type[MemberUser] | type[AdminUser]] = {
    "member": MemberUser,
    "admin": AdminUser,
}


def _actor_kwargs(principal_type: PrincipalType, principal_id: str) -> dict[str, str]:
    if principal_type == "member":
        return {"actor_member_id": principal_id}
    return {"actor_admin_id": principal_id}


def _authorized(principal: Principal, tokens: IssuedTokens) -> AuthorizedResponse:
    return AuthorizedResponse(
        id=principal.id,
        display_name=principal.display_name,
        status=principal.status,
        created_at=principal.created_at,
        token=TokenResponse.model_validate(tokens),
    )


def _open_session(
    db: Session,
    principal_type: PrincipalType,
    principal: Principal,
) -> IssuedTokens:
    """Issue tokens and persist the refresh token as a session row."""
    tokens = issue_tokens(principal.id, principal_type)
    db.add(
        UserSession(
            principal_id=principal.id,
            principal_type=principal_type,
            refresh_token=tokens.refresh,
            issued_at=utcnow(),
            expires_at=tokens.refreshable_until,
        )
    )
    return tokens


def _join(db: Session, payload: JoinRequest, principal_type: PrincipalType) -> AuthorizedResponse:
    existing = db.query(UserCredential).filter(
        UserCredential.email == payload.email,
        UserCredential.deleted_at.is_(None),
    ).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email is already registered",
        )

    now = utcnow()
    credential = UserCredential(
        id=new_id(),
        email=payload.email,
        password_hash=hash_password(payload.password),
        created_at=now,
        updated_at=now,
    )
    model = PRINCIPAL_MODELS[principal_type]
    principal = model(
        id=new_id(),
        user_credential_id=credential.id,
        display_name=payload.display_name,
        created_at=now,
        updated_at=now,
    )
    db.add(credential)
    db.add(principal)
    db.flush()

    tokens = _open_session(db, principal_type, principal)
    record_event(
        db,
        EVENT_MEMBER_JOIN if principal_type == "member" else EVENT_ADMIN_JOIN,
        detail=f"Registered {principal_type} account",
        **_actor_kwargs(principal_type, principal.id),
    )
    db.commit()
    db.refresh(principal)
    return _authorized(principal, tokens)


def _login(db: Session, payload: LoginRequest, principal_type: PrincipalType) -> AuthorizedResponse:
    invalid = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid credentials",
    )
    credential = db.query(UserCredential).filter(
        UserCredential.email == payload.email,
        UserCredential.deleted_at.is_(None),
    ).first()
    if credential is None:
        logger.info("Login failed for unknown %s email", principal_type)
        raise invalid

    model = PRINCIPAL_MODELS[principal_type]
    principal = db.query(model).filter(
        model.user_credential_id == credential.id,
        model.deleted_at.is_(None),
    ).first()
    if principal is None or not verify_password(credential.password_hash, payload.password):
        logger.info("Login failed for %s credential %s", principal_type, credential.id)
        raise invalid

    if not principal.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is not active",
        )

    tokens = _open_session(db, principal_type, principal)
    record_event(
        db,
        EVENT_SESSION_LOGIN,
        detail=f"Login as {principal_type}",
        **_actor_kwargs(principal_type, principal.id),
    )
    db.commit()
    return _authorized(principal, tokens)


def _refresh(
    db: Session,
    payload: RefreshRequest,
    principal_type: PrincipalType,
) -> AuthorizedResponse:
    invalid = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired refresh token",
    )
    try:
        principal_id = decode_token(
            payload.refresh_token,
            principal_type=principal_type,
            token_type="refresh",
        )
    except TokenError as err:
        raise invalid from err

    session = db.query(UserSession).filter(
        UserSession.refresh_token == payload.refresh_token,
        UserSession.principal_type == principal_type,
        UserSession.principal_id == principal_id,
        UserSession.revoked_at.is_(None),
    ).first()
    if session is None or as_utc(session.expires_at) <= utcnow():
        raise invalid

    model = PRINCIPAL_MODELS[principal_type]
    principal = db.query(model).filter(model.id == principal_id).first()
    if principal is None or not principal.is_active:
        raise invalid

    tokens = issue_tokens(principal.id, principal_type)
    session.refresh_token = tokens.refresh
    session.expires_at = tokens.refreshable_until
    record_event(
        db,
        EVENT_SESSION_REFRESH,
        detail=f"Refreshed {principal_type} session {session.id}",
        **_actor_kwargs(principal_type, principal.id),
    )
    db.commit()
    return _authorized(principal, tokens)


@router.post(
    "/members/join",
    response_model=AuthorizedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def join_member(payload: JoinRequest, db: SessionDep) -> AuthorizedResponse:
    """Register a member account and issue its first token pair."""
    return _join(db, payload, "member")


@router.post("/members/login", response_model=AuthorizedResponse)
async def login_member(payload: LoginRequest, db: SessionDep) -> AuthorizedResponse:
    """Authenticate a member by email and password."""
    return _login(db, payload, "member")


@router.post("/members/refresh", response_model=AuthorizedResponse)
async def refresh_member(payload: RefreshRequest, db: SessionDep) -> AuthorizedResponse:
    """Exchange a member refresh token for a new token pair."""
    return _refresh(db, payload, "member")


@router.post(
    "/admins/join",
    response_model=AuthorizedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def join_admin(payload: JoinRequest, db: SessionDep) -> AuthorizedResponse:
    """Register an admin account and issue its first token pair."""
    return _join(db, payload, "admin")


@router.post("/admins/login", response_model=AuthorizedResponse)
async def login_admin(payload: LoginRequest, db: SessionDep) -> AuthorizedResponse:
    """Authenticate an admin by email and password."""
    return _login(db, payload, "admin")


@router.post("/admins/refresh", response_model=AuthorizedResponse)
async def refresh_admin(payload: RefreshRequest, db: SessionDep) -> AuthorizedResponse:
    """Exchange an admin refresh token for a new token pair."""
    return _refresh(db, payload, "admin")
