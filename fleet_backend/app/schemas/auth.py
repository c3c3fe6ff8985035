"""
Authentication Pydantic schemas.

Defines request and response schemas for authentication endpoints.
"""

from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional
from fleet_backend.app.models.enums import UserRole


class UserRegister(BaseModel):
    """
    Schema for user registration.

    Used by POST /auth/register endpoint.
    """
    username: str = Field(..., min_length=3, max_length=50, description="Unique username")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=6, description="Password (min 6 characters)")
    full_name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = Field(default=UserRole.STAFF, description="User role (defaults to staff)")


class UserLogin(BaseModel):
    """
    Schema for user login.

    Supports login with either username or email.
    """
    username: str = Field(..., min_length=1, description="Username or email")
    password: str = Field(..., min_length=1, description="Password")


class ProfileUpdate(BaseModel):
    """Schema for PUT /auth/profile. A password change needs both passwords."""
    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(None, min_length=1, max_length=100)
    current_password: Optional[str] = None
    new_password: Optional[str] = Field(None, min_length=6)


class UserResponse(BaseModel):
    """User information without the password hash."""
    id: int
    username: str
    email: str
    full_name: str
    role: UserRole
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class LoginData(BaseModel):
    """Payload of a successful login."""
    user: UserResponse
    token: str
    token_type: str = "bearer"
