"""Models tracking refresh-token sessions."""

from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from community_platform.db.ids import new_id
from community_platform.db.session import Base
from community_platform.db.time import utcnow

PRINCIPAL_MEMBER = "member"
PRINCIPAL_ADMIN = "admin"


class UserSession(Base):
    """Refresh token issued to a member or admin at login.

    Refreshing rotates ``refresh_token`` in place; revoking stamps
    ``revoked_at`` and the row is kept for auditing.
    """

    __tablename__ = "user_session"
    __table_args__ = (Index("ix_user_session_principal", "principal_type", "principal_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    principal_id: Mapped[str] = mapped_column(String(36), nullable=False)
    principal_type: Mapped[str] = mapped_column(String(8), nullable=False)
    refresh_token: Mapped[str] = mapped_column(Text, nullable=False)
    issued_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    revoked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
