"""
User management endpoints.

Admin only.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.auth.dependencies import require_roles
from inkpost.core.database import get_db
from inkpost.models import User, UserRole, UserStatus
from inkpost.schemas.common import ApiResponse, PaginatedResponse
from inkpost.schemas.user import UserResponse, UserUpdate, UserData
from inkpost.services import user_service

router = APIRouter()

require_admin = require_roles(UserRole.ADMIN)


@router.get("", response_model=ApiResponse[PaginatedResponse[UserResponse]])
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    search: Optional[str] = Query(None, max_length=200),
    role: Optional[UserRole] = None,
    status: Optional[UserStatus] = None,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """List users with pagination and filtering."""
    users, total = await user_service.query_users(
        db,
        page=page,
        limit=limit,
        sort_by=sort_by,
        search=search,
        role=role,
        status=status,
    )
    return ApiResponse(
        message="Users retrieved successfully",
        data=PaginatedResponse.create(
            results=[UserResponse.model_validate(u) for u in users],
            total=total,
            page=page,
            limit=limit,
        ),
    )


@router.get("/{user_id}", response_model=ApiResponse[UserData])
async def get_user(
    user_id: int,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    user = await user_service.require_user(db, user_id)
    return ApiResponse(
        message="User retrieved successfully",
        data=UserData(user=UserResponse.model_validate(user)),
    )


@router.put("/{user_id}", response_model=ApiResponse[UserData])
async def update_user(
    user_id: int,
    body: UserUpdate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Update a user. Only the supplied fields change."""
    user = await user_service.update_user_by_id(db, user_id, body.model_dump(exclude_unset=True))
    return ApiResponse(
        message="User updated successfully",
        data=UserData(user=UserResponse.model_validate(user)),
    )


@router.delete("/{user_id}", response_model=ApiResponse)
async def delete_user(
    user_id: int,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete a user together with their tokens, sessions and posts."""
    await user_service.delete_user_by_id(db, user_id)
    return ApiResponse(message="User deleted successfully")
