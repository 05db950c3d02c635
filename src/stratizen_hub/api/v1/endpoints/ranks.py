"""Rank table endpoints."""

from fastapi import APIRouter, Query

from stratizen_hub.api.v1.dependencies import SessionDep
from stratizen_hub.core.points import rank_for
from stratizen_hub.schemas.user import RankResponse
from stratizen_hub.services.points import list_rank_tiers

router = APIRouter(prefix="/ranks", tags=["ranks"])


@router.get("/", response_model=list[RankResponse])
async def list_ranks(db: SessionDep) -> list[RankResponse]:
    """Return all rank tiers in ascending order."""
    return [RankResponse.model_validate(tier) for tier in list_rank_tiers(db)]


@router.get("/lookup", response_model=RankResponse)
async def lookup_rank(points: int = Query(..., ge=0)) -> RankResponse:
    """Return the tier for a point total."""
    return RankResponse.model_validate(rank_for(points))
