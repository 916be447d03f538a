"""
Authentication request/response schemas.
"""
from datetime import datetime

from pydantic import Field

from defi_tracker.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    """Registration request body."""
    username: str = Field(..., min_length=3, max_length=50, description="Unique login name")
    password: str = Field(..., min_length=8, description="User password (min 8 characters)")


class LoginRequest(CamelModel):
    """Login request body."""
    username: str = Field(..., description="Login name")
    password: str = Field(..., description="User password")


class UserInfoResponse(CamelModel):
    """Current user information (excludes the password hash)."""
    id: int = Field(..., description="User ID")
    username: str = Field(..., description="Login name")
    created_at: datetime = Field(..., description="Account creation timestamp")


class AuthResponse(CamelModel):
    """Login/registration response; the session itself travels in a cookie."""
    message: str = Field(..., description="Outcome message")
    user: UserInfoResponse
