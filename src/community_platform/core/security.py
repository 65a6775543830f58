"""Password hashing and JWT helpers."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Literal

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from jose import JWTError, jwt

from community_platform.core.settings import settings
from community_platform.db.time import utcnow

PrincipalType = Literal["member", "admin"]
TokenType = Literal["access", "refresh"]

PASSWORD_HASHER = PasswordHasher()


class TokenError(ValueError):
    """Raised when a JWT cannot be decoded or carries unexpected claims."""


@dataclass(frozen=True)
class IssuedTokens:
    """Access/refresh pair handed back to clients after authentication."""

    access: str
    refresh: str
    expired_at: datetime
    refreshable_until: datetime


def hash_password(password: str) -> str:
    """Hash a password with Argon2id."""
    return PASSWORD_HASHER.hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    """Return True if ``password`` matches ``password_hash``."""
    try:
        return PASSWORD_HASHER.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def _encode(
    subject: str,
    principal_type: PrincipalType,
    token_type: TokenType,
    expires_at: datetime,
) -> str:
    claims: dict[str, Any] = {
        "sub": subject,
        "type": principal_type,
        "token_type": token_type,
        "iss": settings.jwt_issuer,
        "iat": utcnow(),
        "exp": expires_at,
    }
    if token_type == "refresh":
        # Two refreshes inside the same second must still yield distinct tokens.
        claims["jti"] = f"{subject}:{utcnow().timestamp()}"
    encoded: str = jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)
    return encoded


def issue_tokens(subject: str, principal_type: PrincipalType) -> IssuedTokens:
    """Create a fresh access/refresh pair for a principal."""
    now = utcnow()
    access_expires = now + timedelta(minutes=settings.access_token_expire_minutes)
    refresh_expires = now + timedelta(days=settings.refresh_token_expire_days)
    return IssuedTokens(
        access=_encode(subject, principal_type, "access", access_expires),
        refresh=_encode(subject, principal_type, "refresh", refresh_expires),
        expired_at=access_expires,
        refreshable_until=refresh_expires,
    )


def decode_token(
    token: str,
    *,
    principal_type: PrincipalType,
    token_type: TokenType,
) -> str:
    """Decode a token and return its subject.

    Raises:
        TokenError: If the signature, expiry, issuer or claim kinds are wrong.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
        )
    except JWTError as err:
        raise TokenError("Could not validate credentials") from err

    if payload.get("type") != principal_type or payload.get("token_type") != token_type:
        raise TokenError("Could not validate credentials")

    subject = payload.get("sub")
    if not subject:
        raise TokenError("Could not validate credentials")
    return str(subject)
