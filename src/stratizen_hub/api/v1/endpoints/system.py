"""System and transparency endpoints for the Stratizen Hub API."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter

from stratizen_hub.core.points import RANK_TIERS
from stratizen_hub.core.settings import settings
from stratizen_hub.services.points import current_policy

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/config")
async def get_public_config() -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Excludes secrets and connection strings; suitable for client UIs that
    explain how points are earned.
    """
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
        },
        "points": asdict(current_policy()),
        "ranks": [asdict(tier) for tier in RANK_TIERS],
        "rankings": {
            "unit_ranking_limit": settings.unit_ranking_limit,
            "leaderboard_limit": settings.leaderboard_limit,
        },
        "uploads": {
            "max_upload_bytes": settings.max_upload_bytes,
        },
    }
