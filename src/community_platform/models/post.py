# src/community_platform/models/post.py
"""SQLAlchemy models for posts."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from community_platform.db.ids import new_id
from community_platform.db.session import Base
from community_platform.db.time import utcnow


class Post(Base):
    """Thread opened by a member inside a community.

    Posts are soft-deleted: once ``deleted_at`` is set they disappear from
    every listing but the row stays in place.
    """

    __tablename__ = "post"
    __table_args__ = (
        Index("ix_post_community_created", "community_id", "created_at"),
        Index("ix_post_created_id", "created_at", "id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    community_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("community.id"),
        nullable=False,
    )
    author_member_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("member_user.id"),
        nullable=True,
    )
    # NULL renders as "Anonymous" on the client.
    author_display_name: Mapped[str | None] = mapped_column(Text, nullable=True)

    title: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
