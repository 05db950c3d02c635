"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    ranks_router,
    resources_router,
    system_router,
    units_router,
    users_router,
    votes_router,
)

__all__ = [
    "auth_router",
    "ranks_router",
    "resources_router",
    "system_router",
    "units_router",
    "users_router",
    "votes_router",
]
