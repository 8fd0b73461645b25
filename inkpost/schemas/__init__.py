"""
Pydantic schemas for API request/response validation.

These schemas provide:
- Input validation
- Output serialization (camelCase on the wire)
"""

from inkpost.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    RefreshTokenRequest,
    LogoutRequest,
    AuthTokens,
    AuthData,
    TokensData,
    SessionsData,
)
from inkpost.schemas.user import (
    UserResponse,
    UserUpdate,
    UserData,
)
from inkpost.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryData,
)
from inkpost.schemas.blog import (
    BlogDraft,
    BlogCreate,
    BlogUpdate,
    BlogResponse,
    BlogListItem,
    BlogData,
)
from inkpost.schemas.common import (
    ApiResponse,
    PaginatedResponse,
)

__all__ = [
    # Auth
    "RegisterRequest",
    "LoginRequest",
    "RefreshTokenRequest",
    "LogoutRequest",
    "AuthTokens",
    "AuthData",
    "TokensData",
    "SessionsData",
    # User
    "UserResponse",
    "UserUpdate",
    "UserData",
    # Category
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryData",
    # Blog
    "BlogDraft",
    "BlogCreate",
    "BlogUpdate",
    "BlogResponse",
    "BlogListItem",
    "BlogData",
    # Common
    "ApiResponse",
    "PaginatedResponse",
]
