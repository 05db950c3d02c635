"""Likes and dislikes on resources.

Each user holds at most one vote per resource, enforced by the
``resource_votes`` primary key. Repeating a vote or flipping it is refused
without changing any state.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stratizen_hub.models import Resource, ResourceVote, User
from stratizen_hub.services import resource_service
from stratizen_hub.services.points import award_points, current_policy

logger = logging.getLogger(__name__)

LIKE = 1
DISLIKE = -1


class VoteStatus(str, enum.Enum):
    ACCEPTED = "accepted"
    ALREADY_VOTED = "already_voted"
    CONFLICTING_VOTE = "conflicting_vote"


_MESSAGES = {
    VoteStatus.ACCEPTED: "Vote recorded",
    VoteStatus.ALREADY_VOTED: "You have already voted this way on this resource",
    VoteStatus.CONFLICTING_VOTE: "You cannot both like and dislike the same resource",
}


@dataclass(frozen=True)
class VoteResult:
    """Outcome of :func:`vote` with the resource's counters afterwards."""

    status: VoteStatus
    likes: int
    dislikes: int

    @property
    def message(self) -> str:
        return _MESSAGES[self.status]


def _find_vote(db: Session, user_id: str, resource_id: int) -> ResourceVote | None:
    return db.get(ResourceVote, (resource_id, user_id))


def _classify(existing: ResourceVote, direction: int) -> VoteStatus:
    if existing.direction == direction:
        return VoteStatus.ALREADY_VOTED
    return VoteStatus.CONFLICTING_VOTE


def _result(status: VoteStatus, resource: Resource) -> VoteResult:
    return VoteResult(status=status, likes=resource.likes, dislikes=resource.dislikes)


def vote(db: Session, user: User, resource_id: int, direction: int) -> VoteResult:
    """Record a like (``1``) or dislike (``-1``).

    On acceptance the vote row, the counter increment and the owner's point
    change commit together.

    Raises:
        ValueError: If ``direction`` is not 1 or -1.
        NotFoundError: If the resource does not exist.
        UnauthorizedError: If the resource's unit is outside the user's class.
    """
    if direction not in (LIKE, DISLIKE):
        raise ValueError("direction must be 1 or -1")

    resource = resource_service.get_visible_resource(db, user, resource_id)
    user_id = user.id
    existing = _find_vote(db, user_id, resource_id)
    if existing is not None:
        status = _classify(existing, direction)
        logger.debug("Vote by %s on %s refused: %s", user_id, resource_id, status.value)
        return _result(status, resource)

    db.add(ResourceVote(resource_id=resource_id, user_id=user_id, direction=direction))
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        existing = _find_vote(db, user_id, resource_id)
        resource = resource_service.get_resource(db, resource_id)
        if existing is None:  # pragma: no cover - constraint fired without a row
            raise
        return _result(_classify(existing, direction), resource)

    counter = Resource.likes if direction == LIKE else Resource.dislikes
    db.execute(
        update(Resource)
        .where(Resource.id == resource_id)
        .values({counter: counter + 1})
        .execution_options(synchronize_session=False)
    )
    award_points(
        db,
        resource.user_id,
        current_policy().vote_delta(direction),
        "like received" if direction == LIKE else "dislike received",
    )
    db.commit()
    db.refresh(resource)
    return _result(VoteStatus.ACCEPTED, resource)


def get_my_vote(db: Session, user: User, resource_id: int) -> int:
    """Return the user's vote direction on a resource, or 0."""
    resource_service.get_visible_resource(db, user, resource_id)
    existing = _find_vote(db, user.id, resource_id)
    return existing.direction if existing is not None else 0
