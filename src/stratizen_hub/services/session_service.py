"""Login sessions: acquire on login, resolve per request, revoke on logout."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from stratizen_hub.core import security
from stratizen_hub.db.time import utcnow
from stratizen_hub.models.user import AuthSession, User
from stratizen_hub.services import user_service
from stratizen_hub.services.errors import AuthenticationError
from stratizen_hub.services.points import award_points, current_policy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentSession:
    """Authenticated caller passed explicitly into every operation."""

    session: AuthSession
    user: User


@dataclass(frozen=True)
class LoginResult:
    """Token and session issued by a successful login."""

    access_token: str
    session: AuthSession
    user: User
    points_awarded: int


def login(db: Session, admission_number: str, password: str) -> LoginResult:
    """Authenticate, open a session and apply the login bonus."""
    user = user_service.authenticate(db, admission_number, password)

    auth_session = AuthSession(user_id=user.id)
    db.add(auth_session)
    user.last_login = utcnow()
    db.flush()

    bonus = current_policy().login
    user = award_points(db, user.id, bonus, "login")
    db.commit()
    db.refresh(auth_session)

    logger.info("User %s logged in (session %s)", user.id, auth_session.id)
    return LoginResult(
        access_token=security.create_access_token(user.id, auth_session.id),
        session=auth_session,
        user=user,
        points_awarded=bonus,
    )


def resolve(db: Session, token: str) -> CurrentSession:
    """Turn a bearer token into the live session it references.

    Raises:
        AuthenticationError: If the token is invalid, or the session is
            unknown, revoked or belongs to another user.
    """
    try:
        user_id, session_id = security.decode_access_token(token)
    except ValueError as err:
        raise AuthenticationError(str(err)) from err

    auth_session = db.get(AuthSession, session_id)
    if auth_session is None or auth_session.user_id != user_id:
        raise AuthenticationError("Session not found")
    if not auth_session.active:
        raise AuthenticationError("Session has been logged out")
    return CurrentSession(session=auth_session, user=auth_session.user)


def logout(db: Session, current: CurrentSession) -> None:
    """Revoke the caller's session so its token stops working."""
    current.session.revoked_at = utcnow()
    db.commit()
    logger.info("User %s logged out (session %s)", current.user.id, current.session.id)
