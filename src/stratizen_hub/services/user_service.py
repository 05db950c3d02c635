"""CRUD-style helpers for managing student accounts."""
from __future__ import annotations

import hmac
import logging
from typing import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stratizen_hub.core import security
from stratizen_hub.models.user import User
from stratizen_hub.schemas.user import ProfileUpdateRequest, UserCreate
from stratizen_hub.services.errors import (
    AuthenticationError,
    InvalidOperationError,
    NotFoundError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

__all__ = [
    "get_user",
    "get_user_by_admission",
    "create_user",
    "authenticate",
    "update_profile",
    "change_password",
    "reset_password",
    "leaderboard",
]

_INVALID_CREDENTIALS = "Invalid admission number or password"


def get_user(db: Session, user_id: str) -> User:
    """Return a single user by primary key."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_by_admission(db: Session, admission_number: str) -> User | None:
    """Return the user holding an admission number, if any."""
    return db.query(User).filter(User.admission_number == admission_number).first()


def create_user(db: Session, data: UserCreate, created_by: User | None = None) -> User:
    """Persist a new account with zero points and the lowest rank.

    When ``created_by`` is given, only a super admin may grant admin or
    super admin rights.

    Raises:
        UnauthorizedError: If ``created_by`` may not grant the requested rights.
        InvalidOperationError: If the admission number is taken.
    """
    if (
        created_by is not None
        and (data.is_admin or data.is_super_admin)
        and not created_by.is_super_admin
    ):
        logger.info("User %s denied granting admin rights", created_by.id)
        raise UnauthorizedError("Only a super admin can grant admin rights")
    if get_user_by_admission(db, data.admission_number) is not None:
        raise InvalidOperationError("Admission number is already registered")

    db_user = User(
        admission_number=data.admission_number,
        email=str(data.email),
        name=data.name,
        class_instance_id=data.class_instance_id,
        password_hash=security.hash_password(data.password) if data.password else None,
        reset_code=data.reset_code,
        is_admin=data.is_admin,
        is_super_admin=data.is_super_admin,
        points=0,
        rank=1,
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise InvalidOperationError("Admission number is already registered") from err
    db.refresh(db_user)
    logger.info("Created user %s (%s)", db_user.id, db_user.admission_number)
    return db_user


def authenticate(db: Session, admission_number: str, password: str) -> User:
    """Return the user when the password matches, else raise.

    Unknown admission numbers and wrong passwords produce the same error.
    """
    user = get_user_by_admission(db, admission_number)
    if user is None or not security.verify_password(password, user.password_hash):
        logger.info("Rejected login for admission number %s", admission_number)
        raise AuthenticationError(_INVALID_CREDENTIALS)
    return user


def update_profile(db: Session, db_user: User, update_data: ProfileUpdateRequest) -> User:
    """Apply partial updates to an existing user."""
    update_dict = update_data.model_dump(exclude_unset=True)
    for key, value in update_dict.items():
        if value is None and key != "profile_picture_url":
            continue
        setattr(db_user, key, str(value) if key == "email" else value)

    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def change_password(db: Session, db_user: User, current_password: str, new_password: str) -> None:
    """Replace the account password after checking the current one."""
    if not security.verify_password(current_password, db_user.password_hash):
        raise AuthenticationError("Current password is incorrect")
    db_user.password_hash = security.hash_password(new_password)
    db.commit()
    logger.info("Password changed for user %s", db_user.id)


def reset_password(db: Session, admission_number: str, reset_code: str) -> None:
    """Return an account to the default password when the reset code matches."""
    user = get_user_by_admission(db, admission_number)
    if (
        user is None
        or user.reset_code is None
        or not hmac.compare_digest(user.reset_code, reset_code)
    ):
        raise AuthenticationError("Invalid admission number or reset code")

    user.password_hash = None
    user.reset_code = None
    db.commit()
    logger.info("Password reset to default for user %s", user.id)


def leaderboard(
    db: Session,
    limit: int,
    class_instance_id: int | None = None,
) -> Sequence[User]:
    """Return users with the most points, optionally within one class instance."""
    query = db.query(User)
    if class_instance_id is not None:
        query = query.filter(User.class_instance_id == class_instance_id)
    return query.order_by(User.points.desc(), User.name.asc()).limit(limit).all()
