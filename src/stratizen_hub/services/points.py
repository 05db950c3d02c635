"""Point accounting against the users table.

Balances change through a single ``UPDATE`` that adds the delta, floors the
result at zero and rewrites the denormalised rank in the same statement, so
concurrent awards to one user never overwrite each other.
"""
from __future__ import annotations

import logging

from sqlalchemy import ColumnElement, case, update
from sqlalchemy.orm import Session

from stratizen_hub.core.points import RANK_TIERS, PointsPolicy, RankTier
from stratizen_hub.core.settings import settings
from stratizen_hub.models import Rank, User
from stratizen_hub.services.errors import NotFoundError

logger = logging.getLogger(__name__)

__all__ = [
    "award_points",
    "current_policy",
    "list_rank_tiers",
    "points_after",
    "rank_expression",
    "seed_ranks",
]


def current_policy() -> PointsPolicy:
    """Return the point policy built from runtime settings."""
    return settings.points_policy


def points_after(delta: int) -> ColumnElement[int]:
    """SQL expression for ``max(users.points + delta, 0)``."""
    raw = User.points + delta
    return case((raw < 0, 0), else_=raw)


def rank_expression(points: ColumnElement[int]) -> ColumnElement[int]:
    """SQL expression mapping a non-negative point total to its tier id."""
    bounded = [
        (points <= tier.max_points, tier.id)
        for tier in RANK_TIERS
        if tier.max_points is not None
    ]
    return case(*bounded, else_=RANK_TIERS[-1].id)


def award_points(db: Session, user_id: str, delta: int, reason: str) -> User:
    """Apply ``delta`` to a user's balance and return the refreshed user.

    The caller owns the transaction; nothing is committed here.

    Raises:
        NotFoundError: If the user does not exist.
    """
    new_points = points_after(delta)
    stmt = (
        update(User)
        .where(User.id == user_id)
        .values(points=new_points, rank=rank_expression(new_points))
        .execution_options(synchronize_session=False)
    )
    result = db.execute(stmt)
    if result.rowcount == 0:
        raise NotFoundError("User not found")

    user = db.get(User, user_id, populate_existing=True)
    if user is None:  # pragma: no cover - row was just updated
        raise NotFoundError("User not found")
    logger.info(
        "Points %+d for user %s (%s); balance now %d, rank %d",
        delta,
        user_id,
        reason,
        user.points,
        user.rank,
    )
    return user


def list_rank_tiers(db: Session) -> list[RankTier]:
    """Return the rank table from the ``ranks`` relation, or the built-in one."""
    rows = db.query(Rank).order_by(Rank.min_points.asc()).all()
    if not rows:
        return list(RANK_TIERS)
    return [
        RankTier(row.id, row.name, row.icon, row.min_points, row.max_points)
        for row in rows
    ]


def seed_ranks(db: Session) -> int:
    """Insert the built-in tiers into an empty ``ranks`` relation.

    Returns the number of rows inserted.
    """
    if db.query(Rank).first() is not None:
        return 0
    db.add_all(
        Rank(
            id=tier.id,
            name=tier.name,
            icon=tier.icon,
            min_points=tier.min_points,
            max_points=tier.max_points,
        )
        for tier in RANK_TIERS
    )
    db.commit()
    logger.info("Seeded %d rank tiers", len(RANK_TIERS))
    return len(RANK_TIERS)
