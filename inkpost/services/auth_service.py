"""
Login, registration, refresh rotation and logout.

Failure messages never reveal which check failed: an unknown email and a
wrong password produce the same error, and every refresh failure collapses
to "Please authenticate".
"""

from typing import Any, Dict, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.auth.sessions import consume_session, revoke_session
from inkpost.core.errors import AuthenticationError, NotFoundError
from inkpost.logging import get_logger
from inkpost.models import User, UserRole, Token, TokenType
from inkpost.services import token_service, user_service

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Incorrect email or password"


async def register(
    db: AsyncSession,
    name: str,
    email: str,
    password: str,
) -> Tuple[User, Dict[str, Any]]:
    """Create a regular user and sign them in."""
    user = await user_service.create_user(db, name=name, email=email, password=password, role=UserRole.USER)
    tokens = await token_service.issue_auth_tokens(db, user)
    await db.commit()
    return user, tokens


async def login_with_email_and_password(
    db: AsyncSession,
    email: str,
    password: str,
    client_ip: Optional[str] = None,
) -> Tuple[User, Dict[str, Any]]:
    """
    Check credentials and issue a token pair.

    Raises:
        AuthenticationError: Unknown email, wrong password or inactive account
    """
    user = await user_service.get_user_by_email(db, email)
    if user is None or not user.verify_password(password) or not user.is_active:
        logger.warning("login_failed", client_ip=client_ip)
        raise AuthenticationError(INVALID_CREDENTIALS)

    tokens = await token_service.issue_auth_tokens(db, user)
    # Also persists a re-hashed password if verify_password upgraded it
    await db.commit()

    logger.info("login_succeeded", user_id=user.id, client_ip=client_ip)
    return user, tokens


async def refresh_auth(db: AsyncSession, refresh_token: str) -> Dict[str, Any]:
    """
    Exchange a refresh token for a new pair.

    The presented token is consumed: its record and session are deleted, so
    a second exchange with the same token fails.
    """
    try:
        record = await token_service.verify_token(db, refresh_token, TokenType.REFRESH)
        user = await db.get(User, record.user_id)
        if user is None or not user.is_active:
            raise AuthenticationError()

        await consume_session(db, refresh_token, user.id)
        tokens = await token_service.issue_auth_tokens(db, user)
        await db.commit()
    except AuthenticationError:
        await db.rollback()
        logger.warning("refresh_rejected")
        raise AuthenticationError()

    logger.info("refresh_rotated", user_id=user.id)
    return tokens


async def logout(db: AsyncSession, refresh_token: str) -> None:
    """
    Revoke the session behind a refresh token.

    Raises:
        NotFoundError: No live refresh-token record matches
    """
    result = await db.execute(
        select(Token).where(
            Token.token == refresh_token,
            Token.type == TokenType.REFRESH,
            Token.blacklisted.is_(False),
        )
    )
    record = result.scalars().first()
    if record is None:
        raise NotFoundError("Not found")

    await revoke_session(db, refresh_token, record.user_id)
    await db.commit()

    logger.info("logout", user_id=record.user_id)
