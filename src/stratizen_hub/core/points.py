"""Rank tiers and the point policy table.

Ranks are a pure function of a user's point total: ten contiguous tiers in
ascending order cover ``[0, ∞)``. The policy table holds one canonical delta
per gamification event.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RankTier:
    """A named point range. ``max_points`` of ``None`` means unbounded."""

    id: int
    name: str
    icon: str
    min_points: int
    max_points: int | None

    def contains(self, points: int) -> bool:
        """Return True when ``points`` falls inside this tier."""
        if points < self.min_points:
            return False
        return self.max_points is None or points <= self.max_points


RANK_TIERS: tuple[RankTier, ...] = (
    RankTier(1, "Freshman Scholar", "🔍", 0, 99),
    RankTier(2, "Knowledge Seeker", "📚", 100, 299),
    RankTier(3, "Dedicated Learner", "✏️", 300, 599),
    RankTier(4, "Resource Ranger", "🗂️", 600, 999),
    RankTier(5, "Academic Achiever", "🏆", 1000, 1499),
    RankTier(6, "Knowledge Champion", "🎓", 1500, 2199),
    RankTier(7, "Resource Virtuoso", "⭐", 2200, 2999),
    RankTier(8, "Campus Maven", "🌟", 3000, 3999),
    RankTier(9, "Educational Elite", "👑", 4000, 5499),
    RankTier(10, "Stratizen Legend", "🔱", 5500, None),
)


def rank_for(points: int) -> RankTier:
    """Return the tier whose range contains ``points``.

    Falls back to the lowest tier when nothing matches, which only happens
    for negative input.
    """
    for tier in RANK_TIERS:
        if tier.contains(points):
            return tier
    return RANK_TIERS[0]


def next_rank(tier: RankTier) -> RankTier | None:
    """Return the tier after ``tier`` or None at the top."""
    index = RANK_TIERS.index(tier)
    if index + 1 < len(RANK_TIERS):
        return RANK_TIERS[index + 1]
    return None


@dataclass(frozen=True)
class RankProgress:
    """Where a point total sits relative to the next tier."""

    current: RankTier
    next: RankTier | None
    points_to_next: int
    percent: float


def rank_progress(points: int) -> RankProgress:
    """Describe progress from the current tier towards the next one."""
    current = rank_for(points)
    upcoming = next_rank(current)
    if upcoming is None:
        return RankProgress(current=current, next=None, points_to_next=0, percent=100.0)

    span = upcoming.min_points - current.min_points
    done = max(points - current.min_points, 0)
    percent = round(min(done / span, 1.0) * 100, 1)
    return RankProgress(
        current=current,
        next=upcoming,
        points_to_next=max(upcoming.min_points - points, 0),
        percent=percent,
    )


@dataclass(frozen=True)
class PointsPolicy:
    """Point deltas applied to a user's balance when an event fires."""

    login: int = 5
    upload_note: int = 50
    upload_assignment: int = 10
    upload_past_paper: int = 20
    like_received: int = 5
    dislike_received: int = -2
    completion_on_time: int = 10
    completion_overdue: int = 3
    comment: int = 1
    award_comment_points: bool = False

    def upload_delta(self, resource_type: str) -> int:
        """Return the upload bonus for a resource type value."""
        deltas = {
            "note": self.upload_note,
            "assignment": self.upload_assignment,
            "past_paper": self.upload_past_paper,
        }
        return deltas[resource_type]

    def completion_delta(self, on_time: bool) -> int:
        """Return the bonus for finishing an assignment."""
        return self.completion_on_time if on_time else self.completion_overdue

    def vote_delta(self, direction: int) -> int:
        """Return the owner delta for a like (1) or dislike (-1)."""
        return self.like_received if direction == 1 else self.dislike_received
