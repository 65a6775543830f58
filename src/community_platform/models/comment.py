"""SQLAlchemy model for threaded comments."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from community_platform.db.ids import new_id
from community_platform.db.session import Base
from community_platform.db.time import utcnow


class Comment(Base):
    """Reply attached to a post, optionally nested under another comment."""

    __tablename__ = "comment"
    __table_args__ = (
        Index("ix_comment_post_id", "post_id"),
        Index("ix_comment_parent_id", "parent_comment_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    post_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    # Top-level comments have parent_comment_id = NULL.
    parent_comment_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("comment.id"),
        nullable=True,
    )
    author_member_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("member_user.id"),
        nullable=False,
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)
    edited: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
