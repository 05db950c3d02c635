"""Completion, comment and vote Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CompletionResponse(BaseModel):
    """A recorded completion."""

    id: int
    user_id: str
    resource_id: int
    completed_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CompletionOutcome(BaseModel):
    """Result of marking an assignment complete."""

    status: Literal["completed", "already_completed"]
    on_time: bool | None
    points_awarded: int
    completion: CompletionResponse | None
    message: str


class CommentCreate(BaseModel):
    """Schema for posting a comment."""

    content: str = Field(..., min_length=1, max_length=2000)

    @field_validator("content")
    @classmethod
    def _strip(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Comment cannot be blank")
        return stripped


class CommentAuthor(BaseModel):
    """Subset of the author shown next to a comment."""

    id: str
    name: str
    admission_number: str
    profile_picture_url: str | None

    model_config = ConfigDict(from_attributes=True)


class CommentResponse(BaseModel):
    """Comment returned by the API."""

    id: int
    content: str
    user_id: str
    resource_id: int
    created_at: datetime
    author: CommentAuthor | None = None

    model_config = ConfigDict(from_attributes=True)


class VoteCreate(BaseModel):
    """Schema for liking or disliking a resource."""

    resource_id: int
    direction: Literal[-1, 1] = Field(..., description="1 for like, -1 for dislike")


class VoteOutcome(BaseModel):
    """Result of a vote attempt with the resource's current counters."""

    status: Literal["accepted", "already_voted", "conflicting_vote"]
    likes: int
    dislikes: int
    message: str


class MyVoteResponse(BaseModel):
    """The caller's vote on a resource; 0 when none."""

    direction: Literal[-1, 0, 1]
