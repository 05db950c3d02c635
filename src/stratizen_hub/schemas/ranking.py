"""Ranking Pydantic schemas."""

from pydantic import BaseModel


class UnitRankingEntry(BaseModel):
    """A student's position in a unit's completion-time ranking."""

    id: str
    name: str
    admission_number: str
    profile_picture_url: str | None
    avg_time_ms: float
    avg_time: str
    completion: int
    points: int
