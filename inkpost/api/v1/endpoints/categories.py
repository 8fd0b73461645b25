"""
Category endpoints.

Reads are public; writes require the admin role.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.auth.dependencies import require_roles
from inkpost.core.database import get_db
from inkpost.models import User, UserRole
from inkpost.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryData,
)
from inkpost.schemas.common import ApiResponse, PaginatedResponse
from inkpost.services import category_service

router = APIRouter()


@router.get("", response_model=ApiResponse[PaginatedResponse[CategoryResponse]])
async def list_categories(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    search: Optional[str] = Query(None, max_length=200),
    db: AsyncSession = Depends(get_db),
):
    categories, total = await category_service.query_categories(
        db, page=page, limit=limit, sort_by=sort_by, search=search
    )
    return ApiResponse(
        message="Categories retrieved successfully",
        data=PaginatedResponse.create(
            results=[CategoryResponse.model_validate(c) for c in categories],
            total=total,
            page=page,
            limit=limit,
        ),
    )


@router.post(
    "",
    response_model=ApiResponse[CategoryData],
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    body: CategoryCreate,
    current_user: User = Depends(require_roles(UserRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    category = await category_service.create_category(
        db, name=body.name, slug=body.slug, description=body.description
    )
    return ApiResponse(
        message="Category created successfully",
        data=CategoryData(category=CategoryResponse.model_validate(category)),
    )


@router.get("/{category_id}", response_model=ApiResponse[CategoryData])
async def get_category(
    category_id: int,
    db: AsyncSession = Depends(get_db),
):
    category = await category_service.get_category_by_id(db, category_id)
    return ApiResponse(
        message="Category retrieved successfully",
        data=CategoryData(category=CategoryResponse.model_validate(category)),
    )


@router.put("/{category_id}", response_model=ApiResponse[CategoryData])
async def update_category(
    category_id: int,
    body: CategoryUpdate,
    current_user: User = Depends(require_roles(UserRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    category = await category_service.update_category_by_id(
        db, category_id, body.model_dump(exclude_unset=True)
    )
    return ApiResponse(
        message="Category updated successfully",
        data=CategoryData(category=CategoryResponse.model_validate(category)),
    )


@router.delete("/{category_id}", response_model=ApiResponse)
async def delete_category(
    category_id: int,
    current_user: User = Depends(require_roles(UserRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    await category_service.delete_category_by_id(db, category_id)
    return ApiResponse(message="Category deleted successfully")
