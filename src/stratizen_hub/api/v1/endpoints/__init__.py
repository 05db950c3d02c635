"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .ranks import router as ranks_router
from .resources import router as resources_router
from .system import router as system_router
from .units import router as units_router
from .users import router as users_router
from .votes import router as votes_router

__all__ = [
    "auth_router",
    "ranks_router",
    "resources_router",
    "system_router",
    "units_router",
    "users_router",
    "votes_router",
]
