"""Append-only audit trail of security and moderation events."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from community_platform.db.ids import new_id
from community_platform.db.session import Base
from community_platform.db.time import utcnow


class AuditLog(Base):
    """Single audit event; at most one of the actor columns is set."""

    __tablename__ = "audit_log"
    __table_args__ = (Index("ix_audit_log_created_at", "created_at"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    actor_member_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("member_user.id"),
        nullable=True,
    )
    actor_admin_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("admin_user.id"),
        nullable=True,
    )
    event_type: Mapped[str] = mapped_column(String(64), nullable=False)
    event_detail: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
