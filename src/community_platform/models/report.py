"""Model for member reports against posts and comments."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from community_platform.db.ids import new_id
from community_platform.db.session import Base
from community_platform.db.time import utcnow

REPORT_STATUS_OPEN = "open"
REPORT_STATUS_REVIEWING = "reviewing"
REPORT_STATUS_RESOLVED = "resolved"
REPORT_STATUS_DISMISSED = "dismissed"
# Closed reports keep their status for good.
CLOSED_REPORT_STATUSES = frozenset({REPORT_STATUS_RESOLVED, REPORT_STATUS_DISMISSED})


class ContentReport(Base):
    """A member's complaint about exactly one post or one comment.

    Admins move the report through ``open -> reviewing -> resolved|dismissed``;
    ``resolved_at`` is set while the report is closed and cleared otherwise.
    """

    __tablename__ = "content_report"
    __table_args__ = (
        CheckConstraint(
            "(post_id IS NULL) <> (comment_id IS NULL)",
            name="ck_content_report_single_target",
        ),
        CheckConstraint(
            "status IN ('open', 'reviewing', 'resolved', 'dismissed')",
            name="ck_content_report_status",
        ),
        Index("ix_content_report_post_id", "post_id"),
        Index("ix_content_report_comment_id", "comment_id"),
        Index("ix_content_report_status_created", "status", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    post_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=True,
    )
    comment_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("comment.id", ondelete="CASCADE"),
        nullable=True,
    )
    reporter_member_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("member_user.id"),
        nullable=False,
    )
    report_type: Mapped[str] = mapped_column(String(64), nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=REPORT_STATUS_OPEN)
    reviewer_admin_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("admin_user.id"),
        nullable=True,
    )
    resolution_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
