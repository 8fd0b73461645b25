"""
FastAPI dependencies for authentication and authorization.

Provides:
- get_current_user: Resolve the user behind a bearer access token
- require_roles: Guard a route on role membership
"""

from typing import Iterable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.auth.jwt import decode_token
from inkpost.core.database import get_db
from inkpost.core.errors import AuthenticationError, AuthorizationError
from inkpost.models import User, UserRole, TokenType

# HTTP Bearer token extractor
security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Authenticate the request from its `Authorization: Bearer` header.

    Access tokens are verified statelessly (signature, expiry, type); the
    only lookup is the user record named by the `sub` claim.

    Raises:
        AuthenticationError: Missing/invalid token, or user gone or inactive
    """
    if not credentials or not credentials.credentials:
        raise AuthenticationError()

    payload = decode_token(credentials.credentials, TokenType.ACCESS)

    try:
        user_id = int(payload.sub)
    except ValueError:
        raise AuthenticationError()

    user = await db.get(User, user_id)
    if user is None or not user.is_active:
        raise AuthenticationError()

    request.state.user = user
    return user


def authorize(user: User, allowed_roles: Iterable[UserRole]) -> None:
    """
    Allow when the role set is empty or contains the user's role.

    Raises:
        AuthorizationError: Role not in the allowed set
    """
    roles = frozenset(allowed_roles)
    if roles and user.role not in roles:
        raise AuthorizationError()


def require_roles(*allowed_roles: UserRole):
    """
    Dependency to require an authenticated user, optionally with a role.

    Usage:
        @router.post("/")
        async def create(user: User = Depends(require_roles(UserRole.ADMIN))):
            ...

    With no roles, any authenticated user passes.
    """
    async def role_checker(
        current_user: User = Depends(get_current_user),
    ) -> User:
        authorize(current_user, allowed_roles)
        return current_user

    return role_checker


def get_client_ip(request: Request) -> str:
    """
    Extract client IP address from request.
    Handles X-Forwarded-For header for proxied requests.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"
