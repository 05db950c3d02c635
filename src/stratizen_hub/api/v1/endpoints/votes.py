# src/stratizen_hub/api/v1/endpoints/votes.py
"""Vote-related endpoints for the Stratizen Hub API."""

from fastapi import APIRouter, Response, status

from stratizen_hub.api.v1.dependencies import CurrentUserDep, SessionDep
from stratizen_hub.schemas.engagement import MyVoteResponse, VoteCreate, VoteOutcome
from stratizen_hub.services import vote_service
from stratizen_hub.services.vote_service import VoteStatus

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=VoteOutcome)
async def cast_vote(
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    response: Response,
) -> VoteOutcome:
    """Like or dislike a resource.

    Accepted votes return 201; repeated or conflicting votes return 200 with
    an informational status and leave everything unchanged.
    """
    result = vote_service.vote(db, current_user, vote_data.resource_id, vote_data.direction)
    if result.status is not VoteStatus.ACCEPTED:
        response.status_code = status.HTTP_200_OK
    return VoteOutcome(
        status=result.status.value,
        likes=result.likes,
        dislikes=result.dislikes,
        message=result.message,
    )


@router.get("/{resource_id}/my-vote", response_model=MyVoteResponse)
async def get_my_vote(
    resource_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MyVoteResponse:
    """Get current user's vote on a specific resource."""
    return MyVoteResponse(direction=vote_service.get_my_vote(db, current_user, resource_id))
