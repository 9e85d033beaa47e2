"""User schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

UserRole = Literal["admin", "staff"]


class UserBase(BaseModel):
    """Base user schema."""

    name: str = Field(..., description="Full name", min_length=1)
    email: EmailStr
    role: UserRole = "staff"


class UserCreate(UserBase):
    """Schema for creating a user."""

    pass


class UserResponse(UserBase):
    """Schema for user response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
