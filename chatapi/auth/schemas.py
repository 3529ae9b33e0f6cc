"""
Chat API - Authentication and User Schemas

Pydantic models for API request validation and response serialization.
Separates API contracts from database models; password hashes never
leave the service layer.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, validator
import re


EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")


def _check_email(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    if not EMAIL_PATTERN.match(v):
        raise ValueError("Invalid email format")
    return v.lower()


class LoginRequest(BaseModel):
    """Request body for POST /login."""
    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="User password")


class LoginResponse(BaseModel):
    """Response body for successful login."""
    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Seconds until token expires")


class RegisterRequest(BaseModel):
    """Request body for POST /register."""
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)
    email: str = Field(..., max_length=255)
    role_name: str = Field(default="user", description="Name of a registered role")

    @validator("email")
    def email_format(cls, v):
        """Basic email format validation (allows .local for development)."""
        return _check_email(v)


class UserResponse(BaseModel):
    """Public view of a user."""
    id: int
    username: str
    email: str
    role: str
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True


class RegisterResponse(BaseModel):
    """Response body for registration."""
    message: str = "User registered successfully"
    user: UserResponse
    role: str
    token: str


class ProfileUpdateRequest(BaseModel):
    """Request body for PUT /users/profile/{id}."""
    username: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)

    @validator("email")
    def email_format(cls, v):
        return _check_email(v)


class AdminUserUpdateRequest(ProfileUpdateRequest):
    """Request body for PUT /users/{id} (admin only)."""
    role: Optional[str] = None


class UserUpdateResponse(BaseModel):
    message: str
    user: UserResponse


class MessageOnlyResponse(BaseModel):
    """Acknowledgement for operations without a body."""
    message: str


class ProtectedResponse(BaseModel):
    """Response body for GET /protected."""
    message: str = "This is a protected route"
    user: dict


class ErrorResponse(BaseModel):
    """Standard error response."""
    detail: str
