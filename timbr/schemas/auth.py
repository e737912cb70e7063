"""
Pydantic schemas for signup and login requests and responses.
"""

from pydantic import EmailStr, Field, field_validator
from typing import Optional
from timbr.models.user import UserRole, MIN_PASSWORD_LENGTH
from timbr.schemas.common import CamelModel
from timbr.schemas.user import AuthUser


class SignupRequest(CamelModel):
    """Signup request schema."""

    email: EmailStr = Field(..., description="User's email address", examples=["buyer@example.com"])
    password: str = Field(
        ...,
        min_length=MIN_PASSWORD_LENGTH,
        max_length=128,
        description=f"Password (minimum {MIN_PASSWORD_LENGTH} characters)",
    )
    display_name: str = Field(..., min_length=1, max_length=255, examples=["Jane Doe"])
    role: UserRole = Field(..., description="BUYER, SELLER or AGENT")
    phone: Optional[str] = Field(None, max_length=50)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, v):
        if not v.strip():
            raise ValueError("Display name cannot be empty")
        return v.strip()


class LoginRequest(CamelModel):
    """Login request schema."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()


class AuthResponse(CamelModel):
    """Token plus the authenticated user."""

    token: str = Field(..., description="Signed bearer token")
    user: AuthUser
