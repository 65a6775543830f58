"""Data access helpers for working with posts."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.expression import ColumnElement, UnaryExpression

from community_platform.models.post import Post
from community_platform.models.vote import PostVote

__all__ = ["PostRepository"]

IN_CLAUSE_CHUNK = 500


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_live(self, post_id: str) -> Post | None:
        """Return a post that has not been soft-deleted."""
        return self.session.execute(
            select(Post).where(Post.id == post_id, Post.deleted_at.is_(None))
        ).scalars().first()

    def find_many(
        self,
        where: Sequence[ColumnElement[bool]],
        order_by: Sequence[UnaryExpression],
        *,
        skip: int = 0,
        take: int | None = None,
    ) -> list[Post]:
        """Return posts matching every clause in ``where``, in the given order.

        Args:
            where: Conjunctive predicate clauses.
            order_by: Ordering expressions applied in sequence.
            skip: Number of leading rows to drop.
            take: Maximum number of rows; ``None`` returns every match.
        """
        stmt = select(Post).where(*where).order_by(*order_by)
        if skip:
            stmt = stmt.offset(skip)
        if take is not None:
            stmt = stmt.limit(take)
        return list(self.session.execute(stmt).scalars())

    def count(self, where: Sequence[ColumnElement[bool]]) -> int:
        """Return the number of posts matching ``where``."""
        stmt = select(func.count()).select_from(Post).where(*where)
        return int(self.session.execute(stmt).scalar_one())

    def vote_states_for(self, post_ids: Sequence[str]) -> list[tuple[str, str]]:
        """Return ``(post_id, vote_state)`` for every vote row on ``post_ids``."""
        votes: list[tuple[str, str]] = []
        # Bounded IN lists keep SQLite under its bound-parameter limit.
        for start in range(0, len(post_ids), IN_CLAUSE_CHUNK):
            chunk = post_ids[start : start + IN_CLAUSE_CHUNK]
            rows = self.session.execute(
                select(PostVote.post_id, PostVote.vote_state).where(PostVote.post_id.in_(chunk))
            )
            votes.extend((post_id, vote_state) for post_id, vote_state in rows)
        return votes
