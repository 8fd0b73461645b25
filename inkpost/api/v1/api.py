"""
API Router configuration.

Aggregates all v1 API endpoints with proper tagging and prefixes.
"""

from fastapi import APIRouter

from inkpost.api.v1.endpoints import (
    auth,
    blogs,
    categories,
    home,
    users,
)

api_router = APIRouter()

# Authentication (no auth required for register/login/refresh/logout)
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["authentication"]
)

# User management (admin only)
api_router.include_router(
    users.router,
    prefix="/users",
    tags=["users"]
)

# Categories (public reads, admin writes)
api_router.include_router(
    categories.router,
    prefix="/categories",
    tags=["categories"]
)

# Blog posts (public reads, admin writes)
api_router.include_router(
    blogs.router,
    prefix="/blogs",
    tags=["blogs"]
)

# Protected landing route
api_router.include_router(
    home.router,
    tags=["home"]
)
