# src/stratizen_hub/models/resource.py
"""SQLAlchemy models for shared learning resources."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stratizen_hub.db.session import Base
from stratizen_hub.db.time import utcnow


class ResourceType(str, enum.Enum):
    """Kinds of resource a student can share."""

    ASSIGNMENT = "assignment"
    NOTE = "note"
    PAST_PAPER = "past_paper"

    @property
    def requires_file(self) -> bool:
        """Notes and past papers are always backed by an uploaded file."""
        return self is not ResourceType.ASSIGNMENT


class Resource(Base):
    """Titled item attached to a unit with aggregate like/dislike counters."""

    __tablename__ = "resources"
    __table_args__ = (
        CheckConstraint("likes >= 0", name="ck_resources_likes_non_negative"),
        CheckConstraint("dislikes >= 0", name="ck_resources_dislikes_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    type: Mapped[ResourceType] = mapped_column(
        Enum(
            ResourceType,
            name="resource_type",
            values_callable=lambda members: [member.value for member in members],
        ),
        nullable=False,
    )
    file_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Only set for assignments.
    deadline: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    unit_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("units.id"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    dislikes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    owner = relationship("User", lazy="joined")
