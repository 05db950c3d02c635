# src/stratizen_hub/api/v1/endpoints/auth.py
"""Authentication endpoints for the Stratizen Hub API."""

from __future__ import annotations

from fastapi import APIRouter, status

from stratizen_hub.api.v1.dependencies import CurrentSessionDep, CurrentUserDep, SessionDep
from stratizen_hub.schemas.user import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    ResetPasswordRequest,
    UserResponse,
)
from stratizen_hub.services import session_service, user_service

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/login",
    summary="Log in with an admission number",
    status_code=status.HTTP_200_OK,
    response_model=LoginResponse,
)
async def login_user(payload: LoginRequest, db: SessionDep) -> LoginResponse:
    """Authenticate, open a session and apply the login bonus."""
    result = session_service.login(db, payload.admission_number, payload.password)
    return LoginResponse(
        access_token=result.access_token,
        token_type="bearer",
        session_id=result.session.id,
        points_awarded=result.points_awarded,
        user=UserResponse.model_validate(result.user),
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout_user(current: CurrentSessionDep, db: SessionDep) -> None:
    """Revoke the session behind the presented token."""
    session_service.logout(db, current)


@router.post("/reset-password", status_code=status.HTTP_200_OK)
async def reset_password(payload: ResetPasswordRequest, db: SessionDep) -> dict[str, str]:
    """Reset an account to the default password using its reset code."""
    user_service.reset_password(db, payload.admission_number, payload.reset_code)
    return {"status": "Password has been reset to the default password"}


@router.post("/change-password", status_code=status.HTTP_200_OK)
async def change_password(
    payload: ChangePasswordRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, str]:
    """Replace the caller's password."""
    user_service.change_password(db, current_user, payload.current_password, payload.new_password)
    return {"status": "Password changed successfully"}
