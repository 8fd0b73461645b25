"""
Blog post schemas.

`category` in request bodies is the category id; responses embed a
category summary instead.
"""

from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator, model_validator

from inkpost.models import BlogStatus
from inkpost.schemas.category import CategorySummary
from inkpost.schemas.common import CamelModel
from inkpost.schemas.user import UserSummary
from inkpost.schemas.validators import reject_null


class BlogDraft(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    category: int = Field(ge=1, description="Category ID")
    content: str = Field(min_length=1)
    featured: bool = False
    cover_image: Optional[str] = Field(default=None, max_length=1024)


class BlogCreate(BlogDraft):
    status: BlogStatus = BlogStatus.DRAFT


class BlogUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    category: Optional[int] = Field(default=None, ge=1)
    content: Optional[str] = Field(default=None, min_length=1)
    featured: Optional[bool] = None
    status: Optional[BlogStatus] = None
    cover_image: Optional[str] = Field(default=None, max_length=1024)

    # cover_image may be cleared with null; the rest are required columns
    @field_validator("title", "category", "content", "featured", "status")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)

    @model_validator(mode="after")
    def require_one_field(self) -> "BlogUpdate":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self

    def to_updates(self) -> dict:
        updates = self.model_dump(exclude_unset=True)
        if "category" in updates:
            updates["category_id"] = updates.pop("category")
        return updates


class BlogResponse(CamelModel):
    id: int
    title: str
    content: str
    status: BlogStatus
    featured: bool
    views: int
    cover_image: Optional[str] = None
    category: CategorySummary
    author: UserSummary
    created_at: datetime
    updated_at: datetime


class BlogListItem(CamelModel):
    """Listing row; omits the post body."""

    id: int
    title: str
    status: BlogStatus
    featured: bool
    views: int
    cover_image: Optional[str] = None
    category: CategorySummary
    author: UserSummary
    created_at: datetime


class BlogData(CamelModel):
    blog: BlogResponse
