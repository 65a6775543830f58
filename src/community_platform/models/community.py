"""SQLAlchemy models for community membership and metadata."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from community_platform.db.ids import new_id
from community_platform.db.session import Base
from community_platform.db.time import utcnow


class Community(Base):
    """Community metadata used for grouping posts and members."""

    __tablename__ = "community"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    # Handle-like name, unique regardless of case among live communities.
    name: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner_member_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("member_user.id"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class CommunityMembership(Base):
    """Join table mapping members into communities."""

    __tablename__ = "community_membership"
    __table_args__ = (
        UniqueConstraint("community_id", "member_id", name="uq_community_membership"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    community_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("community.id", ondelete="CASCADE"),
        nullable=False,
    )
    member_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("member_user.id", ondelete="CASCADE"),
        nullable=False,
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


# Communities carry at most this many rules.
MAX_COMMUNITY_RULES = 10


class CommunityRule(Base):
    """Numbered rule shown on a community; indexes run 1..N without gaps."""

    __tablename__ = "community_rule"
    __table_args__ = (Index("ix_community_rule_community_index", "community_id", "rule_index"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    community_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("community.id", ondelete="CASCADE"),
        nullable=False,
    )
    rule_index: Mapped[int] = mapped_column(Integer, nullable=False)
    rule_text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
