"""
Common schemas used across the API.
"""

from typing import Optional, Generic, TypeVar, List
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for API payloads: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Envelope returned by every endpoint, success or failure."""

    success: bool = True
    message: str = "Operation completed successfully"
    data: Optional[T] = None


class PaginatedResponse(CamelModel, Generic[T]):
    """Generic paginated response wrapper."""

    results: List[T]
    page: int = Field(description="Current page number")
    limit: int = Field(description="Items per page")
    total_pages: int = Field(description="Total number of pages")
    total_results: int = Field(description="Total number of items matching filters")

    @classmethod
    def create(
        cls,
        results: List[T],
        total: int,
        page: int,
        limit: int,
    ) -> "PaginatedResponse[T]":
        """Factory method to create paginated response."""
        pages = (total + limit - 1) // limit if limit > 0 else 0
        return cls(
            results=results,
            page=page,
            limit=limit,
            total_pages=pages,
            total_results=total,
        )
