"""
User-related schemas.
"""

from typing import Optional
from datetime import datetime
from pydantic import EmailStr, Field, field_validator

from inkpost.models import UserRole, UserStatus
from inkpost.schemas.common import CamelModel
from inkpost.schemas.validators import check_password_strength, reject_null


class UserResponse(CamelModel):
    """Schema for user response (no password hash)."""

    id: int
    name: str
    email: str
    role: UserRole
    status: UserStatus
    is_email_verified: bool
    created_at: datetime
    updated_at: datetime


class UserSummary(CamelModel):
    """Author block embedded in blog responses."""

    id: int
    name: str
    email: str


class UserUpdate(CamelModel):
    """Admin update of a user. Only supplied fields change."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=8, max_length=100)
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None
    is_email_verified: Optional[bool] = None

    @field_validator("name", "email", "password", "role", "status", "is_email_verified")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.lower().strip()

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return check_password_strength(v)


class UserData(CamelModel):
    user: UserResponse
