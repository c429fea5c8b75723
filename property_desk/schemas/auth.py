"""
Pydantic schemas for authentication requests and responses.
Handles login, password reset issuance and the decoded token identity.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from property_desk.models.user import UserRole
from property_desk.schemas.user import UserResponse


class LoginRequest(BaseModel):
    """Login request schema."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, max_length=128, description="User's password")

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()


class LoginResponse(BaseModel):
    """Successful login: bearer token plus the public user record."""

    token: str = Field(..., description="JWT bearer token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserResponse


class ForgotPasswordRequest(BaseModel):
    """Password reset issuance request."""

    email: EmailStr = Field(..., description="Email address of the account to reset")

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.lower().strip()


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str


class CurrentIdentityResponse(BaseModel):
    """Identity carried by the bearer token."""

    id: str
    email: str
    role: UserRole
