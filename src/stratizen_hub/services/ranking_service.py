"""Per-unit completion-time rankings."""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass

from sqlalchemy import func
from sqlalchemy.orm import Session

from stratizen_hub.db.time import as_utc
from stratizen_hub.models import Completion, Resource, ResourceType, User

MS_PER_SECOND = 1000
SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * 60
SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class UnitRanking:
    """A student's average time to complete a unit's assignments."""

    user: User
    avg_time_ms: float
    completed: int
    completion_percent: int

    @property
    def avg_time(self) -> str:
        return format_duration(self.avg_time_ms)


def format_duration(ms: float) -> str:
    """Render milliseconds as ``"1d 4h 3m 2s"``, dropping zero parts."""
    total_seconds = int(ms // MS_PER_SECOND)
    days, rest = divmod(total_seconds, SECONDS_PER_DAY)
    hours, rest = divmod(rest, SECONDS_PER_HOUR)
    minutes, seconds = divmod(rest, SECONDS_PER_MINUTE)

    parts = [
        f"{value}{suffix}"
        for value, suffix in ((days, "d"), (hours, "h"), (minutes, "m"), (seconds, "s"))
        if value > 0
    ]
    return " ".join(parts) or "0s"


def unit_rankings(db: Session, unit_id: int, limit: int = 10) -> list[UnitRanking]:
    """Rank students by average time from assignment creation to completion.

    Fastest first; at most ``limit`` entries.
    """
    assignment_count = (
        db.query(func.count(Resource.id))
        .filter(Resource.unit_id == unit_id, Resource.type == ResourceType.ASSIGNMENT)
        .scalar()
    ) or 0

    rows = (
        db.query(Completion.user_id, Completion.completed_at, Resource.created_at)
        .join(Resource, Resource.id == Completion.resource_id)
        .filter(Resource.unit_id == unit_id, Resource.type == ResourceType.ASSIGNMENT)
        .all()
    )

    totals: dict[str, float] = defaultdict(float)
    counts: dict[str, int] = defaultdict(int)
    for user_id, completed_at, created_at in rows:
        elapsed = as_utc(completed_at) - as_utc(created_at)
        totals[user_id] += elapsed.total_seconds() * MS_PER_SECOND
        counts[user_id] += 1

    if not counts:
        return []

    users = {user.id: user for user in db.query(User).filter(User.id.in_(list(counts))).all()}
    rankings = [
        UnitRanking(
            user=users[user_id],
            avg_time_ms=totals[user_id] / counts[user_id],
            completed=counts[user_id],
            completion_percent=min(round(counts[user_id] * 100 / assignment_count), 100)
            if assignment_count
            else 0,
        )
        for user_id in counts
        if user_id in users
    ]
    rankings.sort(key=lambda entry: (entry.avg_time_ms, entry.user.name))
    return rankings[:limit]
