# src/stratizen_hub/services/__init__.py
"""Business logic services for the Stratizen Hub application."""

from .completion_service import CompletionResult, CompletionStatus
from .errors import (
    AuthenticationError,
    BackendUnavailableError,
    InvalidOperationError,
    NotFoundError,
    ServiceError,
    UnauthorizedError,
)
from .session_service import CurrentSession
from .storage import ObjectStorage, get_storage
from .vote_service import VoteResult, VoteStatus

__all__ = [
    "CompletionResult", "CompletionStatus",
    "AuthenticationError", "BackendUnavailableError", "InvalidOperationError",
    "NotFoundError", "ServiceError", "UnauthorizedError",
    "CurrentSession",
    "ObjectStorage", "get_storage",
    "VoteResult", "VoteStatus",
]
