from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from inkpost.schemas.common import CamelModel
from inkpost.schemas.validators import reject_null


class CategoryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    slug: str = Field(min_length=1, max_length=120, pattern=r"^[A-Za-z0-9]+(?:-[A-Za-z0-9]+)*$")
    description: str = Field(min_length=1, max_length=2000)


class CategoryUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    slug: Optional[str] = Field(
        default=None, min_length=1, max_length=120, pattern=r"^[A-Za-z0-9]+(?:-[A-Za-z0-9]+)*$"
    )
    description: Optional[str] = Field(default=None, min_length=1, max_length=2000)

    @field_validator("name", "slug", "description")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class CategoryResponse(CamelModel):
    id: int
    name: str
    slug: str
    description: str
    post_count: int
    created_at: datetime
    updated_at: datetime


class CategorySummary(CamelModel):
    id: int
    name: str
    slug: str


class CategoryData(CamelModel):
    category: CategoryResponse
