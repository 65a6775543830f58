# mypy: ignore-errors
# tests/v1/test_security.py
"""Tests for password hashing and JWT issuing/decoding."""

from datetime import timedelta

import pytest
from jose import jwt

from community_platform.core.security import (
    TokenError,
    decode_token,
    hash_password,
    issue_tokens,
    verify_password,
)
from community_platform.core.settings import settings
from community_platform.db.time import utcnow


def test_password_round_trip() -> None:
    """A hash verifies its own password and rejects others."""
    hashed = hash_password("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert verify_password(hashed, "s3cret-pass")
    assert not verify_password(hashed, "wrong-pass1")


def test_verify_password_rejects_garbage_hash() -> None:
    """Malformed stored hashes fail verification instead of raising."""
    assert not verify_password("not-an-argon2-hash", "anything1")


def test_issued_tokens_decode_to_subject() -> None:
    """Access and refresh tokens carry the subject and their kinds."""
    tokens = issue_tokens("member-1", "member")

    assert decode_token(tokens.access, principal_type="member", token_type="access") == "member-1"
    assert decode_token(tokens.refresh, principal_type="member", token_type="refresh") == "member-1"
    assert tokens.refreshable_until > tokens.expired_at


@pytest.mark.parametrize(
    ("principal_type", "token_type"),
    [("admin", "access"), ("member", "refresh")],
)
def test_decode_rejects_wrong_kind(principal_type, token_type) -> None:
    """A member access token is neither an admin token nor a refresh token."""
    tokens = issue_tokens("member-1", "member")
    with pytest.raises(TokenError):
        decode_token(tokens.access, principal_type=principal_type, token_type=token_type)


def test_decode_rejects_expired_token() -> None:
    """Expired tokens are refused."""
    expired = jwt.encode(
        {
            "sub": "member-1",
            "type": "member",
            "token_type": "access",
            "iss": settings.jwt_issuer,
            "exp": utcnow() - timedelta(minutes=1),
        },
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(TokenError):
        decode_token(expired, principal_type="member", token_type="access")


def test_decode_rejects_foreign_signature() -> None:
    """Tokens signed with another key are refused."""
    forged = jwt.encode(
        {"sub": "member-1", "type": "member", "token_type": "access", "iss": settings.jwt_issuer},
        "some-other-key",
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(TokenError):
        decode_token(forged, principal_type="member", token_type="access")
