"""
Authentication-related schemas.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import EmailStr, Field, field_validator

from inkpost.schemas.common import CamelModel
from inkpost.schemas.user import UserResponse
from inkpost.schemas.validators import check_password_strength


class RegisterRequest(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8, max_length=100)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower().strip()

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        return check_password_strength(v)


class LoginRequest(CamelModel):
    """Login request with email and password."""

    email: EmailStr = Field(description="User email address")
    password: str = Field(min_length=1, max_length=100, description="User password")

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower().strip()


class RefreshTokenRequest(CamelModel):
    refresh_token: str = Field(min_length=1, description="Current refresh token")


class LogoutRequest(CamelModel):
    """Body is optional on logout; the token may come from a header or cookie."""

    refresh_token: Optional[str] = None


class TokenInfo(CamelModel):
    token: str
    expires: datetime


class AuthTokens(CamelModel):
    access: TokenInfo
    refresh: TokenInfo


class AuthData(CamelModel):
    user: UserResponse
    tokens: AuthTokens


class TokensData(CamelModel):
    tokens: AuthTokens


class SessionInfo(CamelModel):
    """A live session as shown to its owner. The token itself is never returned."""

    id: int
    created_at: datetime
    expires: datetime


class SessionsData(CamelModel):
    sessions: List[SessionInfo]
