"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from community_platform.core.security import PrincipalType, TokenError, decode_token
from community_platform.db.session import get_db
from community_platform.models import AdminUser, MemberUser

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def _subject_from_credentials(
    credentials: HTTPAuthorizationCredentials,
    principal_type: PrincipalType,
) -> str:
    try:
        return decode_token(
            credentials.credentials,
            principal_type=principal_type,
            token_type="access",
        )
    except TokenError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err


def _ensure_active(principal: MemberUser | AdminUser | None, label: str) -> None:
    """Reject missing or soft-deleted principals (401) and inactive ones (403)."""
    if principal is None or principal.deleted_at is not None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"{label} not found",
        )
    if not principal.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"{label} account is not active",
        )


def get_current_member(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> MemberUser:
    """Get the authenticated, active member from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        MemberUser object for the authenticated member

    Raises:
        HTTPException: If the token is invalid or the member is missing, deleted or inactive
    """
    member_id = _subject_from_credentials(credentials, "member")
    member = db.query(MemberUser).filter(MemberUser.id == member_id).first()
    _ensure_active(member, "Member")
    return member


def get_current_admin(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> AdminUser:
    """Get the authenticated, active admin from the bearer token."""
    admin_id = _subject_from_credentials(credentials, "admin")
    admin = db.query(AdminUser).filter(AdminUser.id == admin_id).first()
    _ensure_active(admin, "Admin")
    return admin


# Type aliases for principal dependencies
CurrentMemberDep = Annotated[MemberUser, Depends(get_current_member)]
CurrentAdminDep = Annotated[AdminUser, Depends(get_current_admin)]
