"""
Inkpost Database Models

This module exports all SQLAlchemy models for the application.
"""

from inkpost.models.user import User, UserRole, UserStatus, normalize_email
from inkpost.models.token import Token, TokenType, PERSISTED_TOKEN_TYPES
from inkpost.models.session import Session
from inkpost.models.category import Category
from inkpost.models.blog import Blog, BlogStatus

__all__ = [
    # User models
    "User",
    "UserRole",
    "UserStatus",
    "normalize_email",
    # Auth records
    "Token",
    "TokenType",
    "PERSISTED_TOKEN_TYPES",
    "Session",
    # Content
    "Category",
    "Blog",
    "BlogStatus",
]
