"""User profile and leaderboard endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from stratizen_hub.api.v1.dependencies import AdminUserDep, CurrentUserDep, SessionDep
from stratizen_hub.core.points import rank_progress
from stratizen_hub.core.settings import settings
from stratizen_hub.schemas.engagement import CompletionResponse
from stratizen_hub.schemas.user import (
    LeaderboardEntry,
    ProfileResponse,
    ProfileUpdateRequest,
    RankProgressResponse,
    UserCreate,
    UserResponse,
)
from stratizen_hub.services import completion_service, user_service

router = APIRouter(prefix="/users", tags=["users"])


def _profile(user) -> ProfileResponse:
    return ProfileResponse(
        user=UserResponse.model_validate(user),
        rank=RankProgressResponse.model_validate(rank_progress(user.points)),
    )


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(current_user: CurrentUserDep) -> ProfileResponse:
    """Return the caller's account with rank progress."""
    return _profile(current_user)


@router.patch("/me", response_model=ProfileResponse)
async def update_my_profile(
    payload: ProfileUpdateRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ProfileResponse:
    """Update the caller's name, email or profile picture."""
    user = user_service.update_profile(db, current_user, payload)
    return _profile(user)


@router.get("/me/completions", response_model=list[CompletionResponse])
async def get_my_completions(
    current_user: CurrentUserDep,
    db: SessionDep,
) -> list[CompletionResponse]:
    """List assignments the caller has completed."""
    completions = completion_service.list_completions(db, current_user)
    return [CompletionResponse.model_validate(completion) for completion in completions]


@router.get("/leaderboard", response_model=list[LeaderboardEntry])
async def get_leaderboard(
    current_user: CurrentUserDep,
    db: SessionDep,
    limit: int = Query(default=settings.leaderboard_limit, ge=1, le=100),
    scope: str = Query(default="all", pattern="^(all|class)$"),
) -> list[LeaderboardEntry]:
    """Students with the most points, across the portal or in the caller's class."""
    class_instance_id = current_user.class_instance_id if scope == "class" else None
    users = user_service.leaderboard(db, limit, class_instance_id)
    return [LeaderboardEntry.model_validate(user) for user in users]


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
async def create_user(payload: UserCreate, admin: AdminUserDep, db: SessionDep) -> UserResponse:
    """Provision an account (admins only; super admins may grant admin rights)."""
    user = user_service.create_user(db, payload, created_by=admin)
    return UserResponse.model_validate(user)
