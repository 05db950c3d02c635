"""Models recording how users engage with resources."""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    SmallInteger,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stratizen_hub.db.session import Base
from stratizen_hub.db.time import utcnow


class Completion(Base):
    """A user finishing an assignment. One row per (user, resource)."""

    __tablename__ = "completions"
    __table_args__ = (
        UniqueConstraint("user_id", "resource_id", name="uq_completions_user_resource"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)
    resource_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("resources.id"),
        nullable=False,
        index=True,
    )
    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class Comment(Base):
    """Append-only comment on a resource."""

    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)
    resource_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("resources.id"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    author = relationship("User", lazy="joined")


class ResourceVote(Base):
    """Per-user like or dislike on a resource.

    The composite primary key keeps one vote per user and resource.
    """

    __tablename__ = "resource_votes"
    __table_args__ = (
        CheckConstraint("direction IN (1, -1)", name="ck_resource_votes_direction"),
    )

    resource_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("resources.id"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        primary_key=True,
    )
    # 1 = like, -1 = dislike.
    direction: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
