"""Assignment completion tracking.

Completing an assignment twice is not an error: the second call reports
``ALREADY_COMPLETED`` and awards nothing, including when two requests race
past the duplicate check and the unique constraint catches the loser.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stratizen_hub.db.time import as_utc, utcnow
from stratizen_hub.models import Completion, Resource, ResourceType, User
from stratizen_hub.services import resource_service
from stratizen_hub.services.errors import InvalidOperationError
from stratizen_hub.services.points import award_points, current_policy

logger = logging.getLogger(__name__)


class CompletionStatus(str, enum.Enum):
    COMPLETED = "completed"
    ALREADY_COMPLETED = "already_completed"


@dataclass(frozen=True)
class CompletionResult:
    """Outcome of :func:`complete`."""

    status: CompletionStatus
    completion: Completion | None
    points_awarded: int
    on_time: bool | None

    @property
    def message(self) -> str:
        """User-facing summary distinguishing on-time and overdue work."""
        if self.status is CompletionStatus.ALREADY_COMPLETED:
            return "You have already completed this assignment"
        if self.on_time:
            return f"Assignment completed on time! +{self.points_awarded} points"
        return f"Assignment completed after the deadline. +{self.points_awarded} points"


def is_on_time(resource: Resource, now: datetime) -> bool:
    """Return True when ``now`` is at or before the deadline, or there is none."""
    if resource.deadline is None:
        return True
    return as_utc(now) <= as_utc(resource.deadline)


def _find_completion(db: Session, user_id: str, resource_id: int) -> Completion | None:
    return (
        db.query(Completion)
        .filter(Completion.user_id == user_id, Completion.resource_id == resource_id)
        .first()
    )


def _already_completed() -> CompletionResult:
    return CompletionResult(
        status=CompletionStatus.ALREADY_COMPLETED,
        completion=None,
        points_awarded=0,
        on_time=None,
    )


def complete(
    db: Session,
    user: User,
    resource_id: int,
    now: datetime | None = None,
) -> CompletionResult:
    """Mark an assignment complete for ``user`` and award points once.

    Raises:
        NotFoundError: If the resource does not exist.
        UnauthorizedError: If the resource's unit is outside the user's class.
        InvalidOperationError: If the resource is not an assignment.
    """
    resource = resource_service.get_visible_resource(db, user, resource_id)
    if resource.type is not ResourceType.ASSIGNMENT:
        raise InvalidOperationError("Only assignments can be marked complete")

    user_id = user.id
    if _find_completion(db, user_id, resource_id) is not None:
        logger.debug("User %s already completed resource %s", user_id, resource_id)
        return _already_completed()

    completed_at = now or utcnow()
    on_time = is_on_time(resource, completed_at)
    completion = Completion(user_id=user_id, resource_id=resource_id, completed_at=completed_at)
    db.add(completion)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        logger.debug("Concurrent completion of resource %s by user %s", resource_id, user_id)
        return _already_completed()

    delta = current_policy().completion_delta(on_time)
    award_points(db, user_id, delta, "completion on time" if on_time else "completion overdue")
    db.commit()
    db.refresh(completion)
    return CompletionResult(
        status=CompletionStatus.COMPLETED,
        completion=completion,
        points_awarded=delta,
        on_time=on_time,
    )


def list_completions(db: Session, user: User) -> Sequence[Completion]:
    """Return the user's completions, most recent first."""
    return (
        db.query(Completion)
        .filter(Completion.user_id == user.id)
        .order_by(Completion.completed_at.desc())
        .all()
    )


def completed_resource_ids(db: Session, user: User, unit_id: int) -> set[int]:
    """Return ids of the unit's resources the user has completed."""
    rows = (
        db.query(Completion.resource_id)
        .join(Resource, Resource.id == Completion.resource_id)
        .filter(Completion.user_id == user.id, Resource.unit_id == unit_id)
        .all()
    )
    return {row.resource_id for row in rows}
