"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .catalog import ClassInstanceResponse, UnitCreate, UnitResponse
from .engagement import (
    CommentCreate,
    CommentResponse,
    CompletionOutcome,
    CompletionResponse,
    MyVoteResponse,
    VoteCreate,
    VoteOutcome,
)
from .ranking import UnitRankingEntry
from .resource import (
    ResourceCreate,
    ResourceCreatedResponse,
    ResourceResponse,
    ResourceUpdate,
    UploadResponse,
)
from .user import (
    ChangePasswordRequest,
    LeaderboardEntry,
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    ProfileUpdateRequest,
    RankProgressResponse,
    RankResponse,
    ResetPasswordRequest,
    UserCreate,
    UserResponse,
)

__all__ = [
    "ClassInstanceResponse", "UnitCreate", "UnitResponse",
    "CommentCreate", "CommentResponse", "CompletionOutcome", "CompletionResponse",
    "MyVoteResponse", "VoteCreate", "VoteOutcome",
    "UnitRankingEntry",
    "ResourceCreate", "ResourceCreatedResponse", "ResourceResponse", "ResourceUpdate",
    "UploadResponse",
    "ChangePasswordRequest", "LeaderboardEntry", "LoginRequest", "LoginResponse",
    "ProfileResponse", "ProfileUpdateRequest", "RankProgressResponse", "RankResponse",
    "ResetPasswordRequest", "UserCreate", "UserResponse",
]
