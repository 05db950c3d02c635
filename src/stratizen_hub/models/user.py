# src/stratizen_hub/models/user.py
"""SQLAlchemy models for student accounts and login sessions."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stratizen_hub.db.session import Base
from stratizen_hub.db.time import utcnow


def _new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """Student identity keyed by a UUID, logging in with an admission number."""

    __tablename__ = "users"
    __table_args__ = (CheckConstraint("points >= 0", name="ck_users_points_non_negative"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    admission_number: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    profile_picture_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    # NULL means the account only accepts the shared default password.
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    class_instance_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("class_instances.id"),
        nullable=True,
    )
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_super_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Denormalised tier id; always written together with points.
    rank: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    reset_code: Mapped[str | None] = mapped_column(String(64), nullable=True)
    last_login: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    sessions: Mapped[list[AuthSession]] = relationship(
        "AuthSession",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    @property
    def has_admin_rights(self) -> bool:
        """Return True for unit admins and super admins."""
        return bool(self.is_admin or self.is_super_admin)


class AuthSession(Base):
    """Server-side login session referenced by the ``sid`` claim of a token."""

    __tablename__ = "auth_sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    revoked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user: Mapped[User] = relationship("User", back_populates="sessions")

    @property
    def active(self) -> bool:
        """Return True until the session is revoked."""
        return self.revoked_at is None
