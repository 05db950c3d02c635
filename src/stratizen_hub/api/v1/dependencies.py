"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from stratizen_hub.db.session import get_db
from stratizen_hub.models import User
from stratizen_hub.services import session_service
from stratizen_hub.services.errors import AuthenticationError
from stratizen_hub.services.session_service import CurrentSession

# Missing headers are reported as 401 below rather than by the scheme.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def _unauthenticated(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_session(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> CurrentSession:
    """Resolve the bearer token into the caller's live login session.

    Raises:
        HTTPException: 401 if the token is missing, invalid or logged out.
    """
    if credentials is None:
        raise _unauthenticated("Not authenticated")
    try:
        return session_service.resolve(db, credentials.credentials)
    except AuthenticationError as err:
        raise _unauthenticated(err.message) from err


CurrentSessionDep = Annotated[CurrentSession, Depends(get_current_session)]


def get_current_user(current: CurrentSessionDep) -> User:
    """Return the user behind the current session."""
    return current.user


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_admin_user(user: CurrentUserDep) -> User:
    """Require a unit admin or super admin."""
    if not user.has_admin_rights:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator rights required",
        )
    return user


AdminUserDep = Annotated[User, Depends(get_admin_user)]
