"""Models capturing voting interactions on posts and comments."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from community_platform.db.ids import new_id
from community_platform.db.session import Base
from community_platform.db.time import utcnow

VOTE_STATE_UPVOTE = "upvote"
VOTE_STATE_DOWNVOTE = "downvote"
VOTE_STATE_NONE = "none"


class PostVote(Base):
    """Per-member vote on a post.

    ``none`` keeps the row around after a member withdraws a vote so the
    history of the pair stays auditable.
    """

    __tablename__ = "post_vote"
    __table_args__ = (
        CheckConstraint(
            "vote_state IN ('upvote', 'downvote', 'none')",
            name="ck_post_vote_state",
        ),
        Index("ix_post_vote_post_id", "post_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    post_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    voter_member_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("member_user.id"),
        nullable=False,
    )
    vote_state: Mapped[str] = mapped_column(String(8), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class CommentVote(Base):
    """Per-member vote on a comment; same state machine as post votes."""

    __tablename__ = "comment_vote"
    __table_args__ = (
        CheckConstraint(
            "vote_state IN ('upvote', 'downvote', 'none')",
            name="ck_comment_vote_state",
        ),
        UniqueConstraint("comment_id", "voter_member_id", name="uq_comment_vote_voter"),
        Index("ix_comment_vote_comment_id", "comment_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    comment_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("comment.id", ondelete="CASCADE"),
        nullable=False,
    )
    voter_member_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("member_user.id"),
        nullable=False,
    )
    vote_state: Mapped[str] = mapped_column(String(8), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
