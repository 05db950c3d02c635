"""User, session and rank Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class LoginRequest(BaseModel):
    """Credentials submitted at login."""

    admission_number: str = Field(..., min_length=1, max_length=32)
    password: str = Field(..., min_length=1)


class ResetPasswordRequest(BaseModel):
    """Reset an account back to the default password with a reset code."""

    admission_number: str = Field(..., min_length=1, max_length=32)
    reset_code: str = Field(..., min_length=1)


class ChangePasswordRequest(BaseModel):
    """Replace the caller's password."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=128)


class UserCreate(BaseModel):
    """Schema for provisioning a student account."""

    admission_number: str = Field(..., min_length=1, max_length=32)
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=200)
    class_instance_id: int | None = None
    password: str | None = Field(None, min_length=8, max_length=128)
    reset_code: str | None = None
    is_admin: bool = False
    is_super_admin: bool = False


class ProfileUpdateRequest(BaseModel):
    """Schema for updating user profile information."""

    name: str | None = Field(None, min_length=1, max_length=200)
    email: EmailStr | None = None
    profile_picture_url: str | None = None


class UserResponse(BaseModel):
    """Public view of a user account."""

    id: str
    admission_number: str
    email: str
    name: str
    profile_picture_url: str | None
    class_instance_id: int | None
    is_admin: bool
    is_super_admin: bool
    points: int
    rank: int
    last_login: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RankResponse(BaseModel):
    """A rank tier."""

    id: int
    name: str
    icon: str
    min_points: int
    max_points: int | None

    model_config = ConfigDict(from_attributes=True)


class RankProgressResponse(BaseModel):
    """Current tier plus distance to the next one."""

    current: RankResponse
    next: RankResponse | None
    points_to_next: int
    percent: float

    model_config = ConfigDict(from_attributes=True)


class ProfileResponse(BaseModel):
    """The caller's account with rank progress."""

    user: UserResponse
    rank: RankProgressResponse


class LoginResponse(BaseModel):
    """Response returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type (typically 'bearer')")
    session_id: str = Field(..., description="Server-side session the token is bound to")
    points_awarded: int = Field(..., description="Login bonus applied to the balance")
    user: UserResponse


class LeaderboardEntry(BaseModel):
    """Row of the points leaderboard."""

    id: str
    name: str
    admission_number: str
    profile_picture_url: str | None
    points: int
    rank: int

    model_config = ConfigDict(from_attributes=True)
