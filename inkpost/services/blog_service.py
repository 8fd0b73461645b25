"""
Blog posts: CRUD, draft/publish workflow and view counting.

Category post counts move with the posts: incremented on create,
transferred on category change, decremented on delete.
"""

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from inkpost.core.errors import ApiError, NotFoundError
from inkpost.logging import get_logger
from inkpost.models import Blog, BlogStatus, Category
from inkpost.services.category_service import get_category_by_id
from inkpost.services.common import parse_sort, paginate

logger = get_logger(__name__)

BLOG_SORT_FIELDS = {
    "title": Blog.title,
    "views": Blog.views,
    "status": Blog.status,
    "featured": Blog.featured,
    "createdAt": Blog.created_at,
    "created_at": Blog.created_at,
    "updatedAt": Blog.updated_at,
    "updated_at": Blog.updated_at,
}


async def _bump_post_count(db: AsyncSession, category_id: int, delta: int) -> None:
    await db.execute(
        update(Category)
        .where(Category.id == category_id)
        .values(post_count=Category.post_count + delta)
    )


async def _load_blog(db: AsyncSession, blog_id: int) -> Optional[Blog]:
    result = await db.execute(
        select(Blog)
        .where(Blog.id == blog_id)
        .options(selectinload(Blog.category), selectinload(Blog.author))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_blog_by_id(db: AsyncSession, blog_id: int) -> Blog:
    blog = await _load_blog(db, blog_id)
    if blog is None:
        raise NotFoundError("Blog not found")
    return blog


async def create_blog(
    db: AsyncSession,
    author_id: int,
    title: str,
    content: str,
    category_id: int,
    featured: bool = False,
    status: BlogStatus = BlogStatus.DRAFT,
    cover_image: Optional[str] = None,
) -> Blog:
    # Fails with 404 before anything is written
    await get_category_by_id(db, category_id)

    blog = Blog(
        title=title.strip(),
        content=content,
        category_id=category_id,
        author_id=author_id,
        featured=featured,
        status=status,
        cover_image=cover_image,
    )
    db.add(blog)
    await db.flush()
    await _bump_post_count(db, category_id, 1)
    await db.commit()

    logger.info("blog_created", blog_id=blog.id, status=blog.status.value)
    return await get_blog_by_id(db, blog.id)


async def save_blog_as_draft(db: AsyncSession, author_id: int, **fields) -> Blog:
    fields["status"] = BlogStatus.DRAFT
    return await create_blog(db, author_id=author_id, **fields)


async def publish_blog(db: AsyncSession, blog_id: int) -> Blog:
    blog = await get_blog_by_id(db, blog_id)
    if blog.status == BlogStatus.PUBLISHED:
        raise ApiError("Blog is already published")

    blog.status = BlogStatus.PUBLISHED
    await db.commit()

    logger.info("blog_published", blog_id=blog_id)
    return await get_blog_by_id(db, blog_id)


async def increment_blog_views(db: AsyncSession, blog_id: int) -> Blog:
    """Fetch a post for reading and count the view."""
    result = await db.execute(
        update(Blog).where(Blog.id == blog_id).values(views=Blog.views + 1)
    )
    if result.rowcount == 0:
        raise NotFoundError("Blog not found")
    await db.commit()
    return await get_blog_by_id(db, blog_id)


async def query_blogs(
    db: AsyncSession,
    page: int = 1,
    limit: int = 10,
    sort_by: Optional[str] = None,
    search: Optional[str] = None,
    category_id: Optional[int] = None,
    created_at_from: Optional[datetime] = None,
    created_at_to: Optional[datetime] = None,
    featured: Optional[bool] = None,
    status: Optional[str] = None,
) -> Tuple[List[Blog], int]:
    """
    Filtered, paginated listing.

    `sort_by` accepts `field` or `field:asc|desc`; `status="all"` disables
    the status filter.
    """
    query = select(Blog).options(selectinload(Blog.category), selectinload(Blog.author))

    if search:
        query = query.where(Blog.title.ilike(f"%{search}%"))
    if category_id is not None:
        query = query.where(Blog.category_id == category_id)
    if created_at_from is not None:
        query = query.where(Blog.created_at >= created_at_from)
    if created_at_to is not None:
        query = query.where(Blog.created_at <= created_at_to)
    if featured is not None:
        query = query.where(Blog.featured.is_(featured))
    if status and status != "all":
        try:
            query = query.where(Blog.status == BlogStatus(status))
        except ValueError:
            raise ApiError(f"Unknown blog status '{status}'")

    query = query.order_by(parse_sort(sort_by, BLOG_SORT_FIELDS, "createdAt", "desc"))
    return await paginate(db, query, page, limit)


async def update_blog_by_id(db: AsyncSession, blog_id: int, updates: dict) -> Blog:
    blog = await get_blog_by_id(db, blog_id)
    original_category_id = blog.category_id

    new_category_id = updates.pop("category_id", None)
    if new_category_id is not None and new_category_id != original_category_id:
        await get_category_by_id(db, new_category_id)
        blog.category_id = new_category_id
        await _bump_post_count(db, original_category_id, -1)
        await _bump_post_count(db, new_category_id, 1)

    for field, value in updates.items():
        setattr(blog, field, value)

    await db.commit()
    return await get_blog_by_id(db, blog_id)


async def release_author_posts(db: AsyncSession, author_id: int) -> None:
    """Take an author's posts out of their category counts before the author is deleted."""
    result = await db.execute(
        select(Blog.category_id, func.count(Blog.id))
        .where(Blog.author_id == author_id)
        .group_by(Blog.category_id)
    )
    for category_id, count in result.all():
        await _bump_post_count(db, category_id, -count)


async def delete_blog_by_id(db: AsyncSession, blog_id: int) -> Blog:
    blog = await get_blog_by_id(db, blog_id)
    await _bump_post_count(db, blog.category_id, -1)
    await db.delete(blog)
    await db.commit()

    logger.info("blog_deleted", blog_id=blog_id)
    return blog
