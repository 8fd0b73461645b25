from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.core.errors import ConflictError, NotFoundError
from inkpost.models import Blog, Category
from inkpost.services.common import parse_sort, paginate

CATEGORY_SORT_FIELDS = {
    "name": Category.name,
    "slug": Category.slug,
    "postCount": Category.post_count,
    "post_count": Category.post_count,
    "createdAt": Category.created_at,
    "created_at": Category.created_at,
}


def normalize_slug(slug: str) -> str:
    return (slug or "").strip().lower()


async def is_slug_taken(
    db: AsyncSession,
    slug: str,
    exclude_category_id: Optional[int] = None,
) -> bool:
    query = select(Category.id).where(Category.slug == normalize_slug(slug))
    if exclude_category_id is not None:
        query = query.where(Category.id != exclude_category_id)
    return (await db.execute(query)).first() is not None


async def create_category(db: AsyncSession, name: str, slug: str, description: str) -> Category:
    if await is_slug_taken(db, slug):
        raise ConflictError("Slug already taken")

    category = Category(
        name=name.strip(),
        slug=normalize_slug(slug),
        description=description.strip(),
    )
    db.add(category)
    await db.commit()
    return category


async def query_categories(
    db: AsyncSession,
    page: int = 1,
    limit: int = 10,
    sort_by: Optional[str] = None,
    search: Optional[str] = None,
) -> Tuple[List[Category], int]:
    query = select(Category)
    if search:
        query = query.where(Category.name.ilike(f"%{search}%"))
    query = query.order_by(parse_sort(sort_by, CATEGORY_SORT_FIELDS, "name:asc"))
    return await paginate(db, query, page, limit)


async def get_category_by_id(db: AsyncSession, category_id: int) -> Category:
    category = await db.get(Category, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    return category


async def update_category_by_id(db: AsyncSession, category_id: int, updates: dict) -> Category:
    category = await get_category_by_id(db, category_id)

    slug = updates.pop("slug", None)
    if slug is not None:
        if await is_slug_taken(db, slug, exclude_category_id=category_id):
            raise ConflictError("Slug already taken")
        category.slug = normalize_slug(slug)

    for field, value in updates.items():
        setattr(category, field, value)

    await db.commit()
    return category


async def delete_category_by_id(db: AsyncSession, category_id: int) -> Category:
    category = await get_category_by_id(db, category_id)
    has_posts = await db.execute(select(Blog.id).where(Blog.category_id == category_id).limit(1))
    if has_posts.first() is not None:
        raise ConflictError("Category still has posts")
    await db.delete(category)
    await db.commit()
    return category
