"""
Pydantic schemas for user data.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime
from property_desk.models.user import UserRole


class UserResponse(BaseModel):
    """User response schema (excluding password hash and reset fields)."""

    id: str = Field(..., description="User's unique identifier")
    name: str
    email: EmailStr
    role: UserRole
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
