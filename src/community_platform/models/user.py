# src/community_platform/models/user.py
"""SQLAlchemy models for credentials and the two principal kinds."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from community_platform.db.ids import new_id
from community_platform.db.session import Base
from community_platform.db.time import utcnow

USER_STATUS_ACTIVE = "active"
USER_STATUS_SUSPENDED = "suspended"


class UserCredential(Base):
    """Email/password pair shared by member and admin accounts."""

    __tablename__ = "user_credential"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class MemberUser(Base):
    """Regular community member able to post, comment and vote."""

    __tablename__ = "member_user"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_credential_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("user_credential.id"),
        nullable=False,
    )
    display_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=USER_STATUS_ACTIVE)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    credential: Mapped[UserCredential] = relationship("UserCredential")

    @property
    def is_active(self) -> bool:
        """Return True when the account may act on the platform."""
        return self.deleted_at is None and self.status == USER_STATUS_ACTIVE


class AdminUser(Base):
    """Platform administrator with moderation and audit privileges."""

    __tablename__ = "admin_user"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_credential_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("user_credential.id"),
        nullable=False,
    )
    display_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=USER_STATUS_ACTIVE)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    credential: Mapped[UserCredential] = relationship("UserCredential")

    @property
    def is_active(self) -> bool:
        """Return True when the account may act on the platform."""
        return self.deleted_at is None and self.status == USER_STATUS_ACTIVE
