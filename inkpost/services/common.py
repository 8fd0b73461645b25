from typing import Mapping, Tuple

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from inkpost.core.errors import ApiError


def parse_sort(
    sort_by: str | None,
    allowed: Mapping[str, InstrumentedAttribute],
    default: str,
    default_order: str = "asc",
):
    """
    Turn `field` or `field:asc|desc` into an ORDER BY clause.

    Unknown fields are rejected rather than silently ignored.
    """
    field, _, order = (sort_by or default).partition(":")
    order = (order or default_order).lower()
    column = allowed.get(field)
    if column is None:
        raise ApiError(f"Cannot sort by '{field}'")
    return column.desc() if order == "desc" else column.asc()


async def paginate(
    db: AsyncSession,
    query: Select,
    page: int,
    limit: int,
) -> Tuple[list, int]:
    """Run a filtered query for one page and count all matching rows."""
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total = (await db.execute(count_query)).scalar_one()

    offset = (page - 1) * limit
    result = await db.execute(query.offset(offset).limit(limit))
    return list(result.scalars().all()), total
