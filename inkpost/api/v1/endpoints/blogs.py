"""
Blog endpoints.

Listing and reading are public (reading counts a view). Creating,
drafting, publishing, editing and deleting require the admin role; the
author is always the authenticated admin.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.auth.dependencies import require_roles
from inkpost.core.database import get_db
from inkpost.models import User, UserRole
from inkpost.schemas.blog import (
    BlogDraft,
    BlogCreate,
    BlogUpdate,
    BlogResponse,
    BlogListItem,
    BlogData,
)
from inkpost.schemas.common import ApiResponse, PaginatedResponse
from inkpost.services import blog_service

router = APIRouter()

require_admin = require_roles(UserRole.ADMIN)


def _blog_data(blog) -> BlogData:
    return BlogData(blog=BlogResponse.model_validate(blog))


@router.get("", response_model=ApiResponse[PaginatedResponse[BlogListItem]])
async def list_blogs(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    search: Optional[str] = Query(None, max_length=200),
    category_id: Optional[int] = Query(None, alias="categoryId"),
    created_at_from: Optional[datetime] = Query(None, alias="createdAtFrom"),
    created_at_to: Optional[datetime] = Query(None, alias="createdAtTo"),
    featured: Optional[bool] = None,
    status: Optional[str] = Query(None, description="Blog status, or 'all'"),
    db: AsyncSession = Depends(get_db),
):
    blogs, total = await blog_service.query_blogs(
        db,
        page=page,
        limit=limit,
        sort_by=sort_by,
        search=search,
        category_id=category_id,
        created_at_from=created_at_from,
        created_at_to=created_at_to,
        featured=featured,
        status=status,
    )
    return ApiResponse(
        message="Blogs retrieved successfully",
        data=PaginatedResponse.create(
            results=[BlogListItem.model_validate(b) for b in blogs],
            total=total,
            page=page,
            limit=limit,
        ),
    )


@router.post("", response_model=ApiResponse[BlogData], status_code=status.HTTP_201_CREATED)
async def create_blog(
    body: BlogCreate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    blog = await blog_service.create_blog(
        db,
        author_id=current_user.id,
        title=body.title,
        content=body.content,
        category_id=body.category,
        featured=body.featured,
        status=body.status,
        cover_image=body.cover_image,
    )
    return ApiResponse(message="Blog created successfully", data=_blog_data(blog))


@router.post("/draft", response_model=ApiResponse[BlogData], status_code=status.HTTP_201_CREATED)
async def save_draft(
    body: BlogDraft,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    blog = await blog_service.save_blog_as_draft(
        db,
        author_id=current_user.id,
        title=body.title,
        content=body.content,
        category_id=body.category,
        featured=body.featured,
        cover_image=body.cover_image,
    )
    return ApiResponse(message="Blog saved as draft successfully", data=_blog_data(blog))


@router.patch("/{blog_id}/publish", response_model=ApiResponse[BlogData])
async def publish_blog(
    blog_id: int,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    blog = await blog_service.publish_blog(db, blog_id)
    return ApiResponse(message="Blog published successfully", data=_blog_data(blog))


@router.get("/{blog_id}", response_model=ApiResponse[BlogData])
async def get_blog(
    blog_id: int,
    db: AsyncSession = Depends(get_db),
):
    blog = await blog_service.increment_blog_views(db, blog_id)
    return ApiResponse(message="Blog retrieved successfully", data=_blog_data(blog))


@router.put("/{blog_id}", response_model=ApiResponse[BlogData])
async def update_blog(
    blog_id: int,
    body: BlogUpdate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    blog = await blog_service.update_blog_by_id(db, blog_id, body.to_updates())
    return ApiResponse(message="Blog updated successfully", data=_blog_data(blog))


@router.delete("/{blog_id}", response_model=ApiResponse)
async def delete_blog(
    blog_id: int,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await blog_service.delete_blog_by_id(db, blog_id)
    return ApiResponse(message="Blog deleted successfully")
