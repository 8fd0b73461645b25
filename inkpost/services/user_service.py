"""
Credential store: user records and password checks.
"""

from typing import Optional, Tuple, List

from sqlalchemy import select, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.core.errors import ConflictError, NotFoundError
from inkpost.logging import get_logger
from inkpost.models import User, UserRole, UserStatus, normalize_email
from inkpost.services.blog_service import release_author_posts
from inkpost.services.common import parse_sort, paginate

logger = get_logger(__name__)

USER_SORT_FIELDS = {
    "name": User.name,
    "email": User.email,
    "role": User.role,
    "createdAt": User.created_at,
    "created_at": User.created_at,
}


async def is_email_taken(
    db: AsyncSession,
    email: str,
    exclude_user_id: Optional[int] = None,
) -> bool:
    query = select(User.id).where(User.email == normalize_email(email))
    if exclude_user_id is not None:
        query = query.where(User.id != exclude_user_id)
    result = await db.execute(query)
    return result.first() is not None


async def create_user(
    db: AsyncSession,
    name: str,
    email: str,
    password: str,
    role: UserRole = UserRole.USER,
) -> User:
    """
    Create a user with a hashed password.

    Raises:
        ConflictError: Email already registered
    """
    if await is_email_taken(db, email):
        raise ConflictError("Email already taken")

    user = User(
        name=name.strip(),
        email=normalize_email(email),
        role=role,
        status=UserStatus.ACTIVE,
        is_email_verified=False,
    )
    user.set_password(password)
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        await db.rollback()
        raise ConflictError("Email already taken")

    logger.info("user_created", user_id=user.id, role=user.role.value)
    return user


async def get_user_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == normalize_email(email)))
    return result.scalar_one_or_none()


async def require_user(db: AsyncSession, user_id: int) -> User:
    user = await get_user_by_id(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


async def query_users(
    db: AsyncSession,
    page: int = 1,
    limit: int = 10,
    sort_by: Optional[str] = None,
    search: Optional[str] = None,
    role: Optional[UserRole] = None,
    status: Optional[UserStatus] = None,
) -> Tuple[List[User], int]:
    query = select(User)

    if search:
        pattern = f"%{search.lower()}%"
        query = query.where(or_(User.name.ilike(pattern), User.email.ilike(pattern)))
    if role:
        query = query.where(User.role == role)
    if status:
        query = query.where(User.status == status)

    query = query.order_by(parse_sort(sort_by, USER_SORT_FIELDS, "createdAt", "desc"))
    return await paginate(db, query, page, limit)


async def update_user_by_id(db: AsyncSession, user_id: int, updates: dict) -> User:
    """
    Apply a partial update.

    Raises:
        NotFoundError: No such user
        ConflictError: New email belongs to another user
    """
    user = await require_user(db, user_id)

    email = updates.pop("email", None)
    if email is not None:
        if await is_email_taken(db, email, exclude_user_id=user_id):
            raise ConflictError("Email already taken")
        user.email = normalize_email(email)

    password = updates.pop("password", None)
    if password is not None:
        user.set_password(password)

    for field, value in updates.items():
        setattr(user, field, value)

    await db.commit()
    return user


async def delete_user_by_id(db: AsyncSession, user_id: int) -> User:
    user = await require_user(db, user_id)
    # blogs go with the user through ON DELETE CASCADE
    await release_author_posts(db, user_id)
    await db.delete(user)
    await db.commit()
    logger.info("user_deleted", user_id=user_id)
    return user
