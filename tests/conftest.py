# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime, timedelta
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-community-platform")

from community_platform.core.security import hash_password, issue_tokens  # noqa: E402
from community_platform.db.session import Base  # noqa: E402
from community_platform.db.session import get_db as app_get_session  # noqa: E402
from community_platform.db.time import utcnow  # noqa: E402
from community_platform.main import app as fastapi_app  # noqa: E402
from community_platform.models import (  # noqa: E402
    AdminUser,
    Community,
    CommunityMembership,
    MemberUser,
    Post,
    PostVote,
    UserCredential,
)

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct-horse-42"

_EMAIL_COUNTER = count(1)
_COMMUNITY_COUNTER = count(1)
# Fixed base so created_at ordering in ranking tests is deterministic.
POST_EPOCH = datetime(2026, 1, 1, 12, 0, 0)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Every test starts from empty tables even if a commit slipped through.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _credential(db_session: Session, email: str | None = None) -> UserCredential:
    credential = UserCredential(
        email=email or f"user{next(_EMAIL_COUNTER)}@example.com",
        password_hash=hash_password(TEST_PASSWORD),
    )
    db_session.add(credential)
    db_session.flush()
    return credential


def _bearer(subject: str, principal_type: str) -> dict[str, str]:
    tokens = issue_tokens(subject, principal_type)  # type: ignore[arg-type]
    return {"Authorization": f"Bearer {tokens.access}"}


@pytest.fixture()
def make_member(db_session: Session) -> Callable[..., MemberUser]:
    """Return a factory that persists member accounts."""

    def _make(display_name: str | None = "Member", **overrides) -> MemberUser:
        credential = _credential(db_session, overrides.pop("email", None))
        member = MemberUser(
            user_credential_id=credential.id,
            display_name=display_name,
            **overrides,
        )
        db_session.add(member)
        db_session.flush()
        db_session.refresh(member)
        return member

    return _make


@pytest.fixture()
def member(make_member: Callable[..., MemberUser]) -> MemberUser:
    """Primary member used by most endpoint tests."""
    return make_member("Test Member")


@pytest.fixture()
def other_member(make_member: Callable[..., MemberUser]) -> MemberUser:
    """Second member, used for ownership and voting checks."""
    return make_member("Other Member")


@pytest.fixture()
def admin(db_session: Session) -> AdminUser:
    """Persisted admin account."""
    credential = _credential(db_session)
    admin = AdminUser(user_credential_id=credential.id, display_name="Test Admin")
    db_session.add(admin)
    db_session.flush()
    db_session.refresh(admin)
    return admin


@pytest.fixture()
def auth_token(member: MemberUser) -> dict[str, str]:
    """Return authorization headers for the primary member."""
    return _bearer(member.id, "member")


@pytest.fixture()
def other_auth_token(other_member: MemberUser) -> dict[str, str]:
    """Return authorization headers for the secondary member."""
    return _bearer(other_member.id, "member")


@pytest.fixture()
def admin_token(admin: AdminUser) -> dict[str, str]:
    """Return authorization headers for the admin."""
    return _bearer(admin.id, "admin")


@pytest.fixture()
def community(db_session: Session, member: MemberUser) -> Community:
    """Create a community owned by the primary member."""
    community = Community(
        name=f"community_{next(_COMMUNITY_COUNTER)}",
        description="Test community description",
        owner_member_id=member.id,
    )
    db_session.add(community)
    db_session.flush()
    db_session.add(CommunityMembership(community_id=community.id, member_id=member.id))
    db_session.flush()
    db_session.refresh(community)
    return community


@pytest.fixture()
def make_post(
    db_session: Session,
    community: Community,
    member: MemberUser,
) -> Callable[..., Post]:
    """Return a factory for posts; ``minutes`` offsets created_at from a fixed epoch."""

    def _make(
        title: str = "Test post",
        body: str = "Test post content",
        *,
        minutes: int = 0,
        author: MemberUser | None = None,
        **overrides,
    ) -> Post:
        created_at = POST_EPOCH + timedelta(minutes=minutes)
        post = Post(
            community_id=overrides.pop("community_id", community.id),
            author_member_id=(author or member).id,
            author_display_name=overrides.pop("author_display_name", None),
            title=title,
            body=body,
            created_at=created_at,
            updated_at=created_at,
            **overrides,
        )
        db_session.add(post)
        db_session.flush()
        db_session.refresh(post)
        return post

    return _make


@pytest.fixture()
def test_post(make_post: Callable[..., Post]) -> Post:
    """Create a baseline post authored by the primary member."""
    return make_post()


@pytest.fixture()
def add_votes(
    db_session: Session,
    make_member: Callable[..., MemberUser],
) -> Callable[[Post, int, int], None]:
    """Return a helper that attaches ``up`` upvotes and ``down`` downvotes from fresh voters."""

    def _add(post: Post, up: int = 0, down: int = 0) -> None:
        states = ["upvote"] * up + ["downvote"] * down
        now = utcnow()
        for state in states:
            voter = make_member(None)
            db_session.add(
                PostVote(
                    post_id=post.id,
                    voter_member_id=voter.id,
                    vote_state=state,
                    created_at=now,
                    updated_at=now,
                )
            )
        db_session.flush()

    return _add
