"""
Token issuance and verification backed by the token table.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.auth.jwt import issue_token, decode_token
from inkpost.auth.sessions import record_session
from inkpost.core.config import ACCESS_TOKEN_EXPIRE_MINUTES, REFRESH_TOKEN_EXPIRE_DAYS
from inkpost.core.errors import AuthenticationError
from inkpost.models import User, Token, TokenType, PERSISTED_TOKEN_TYPES


async def save_token(
    db: AsyncSession,
    token: str,
    user_id: int,
    expires: datetime,
    token_type: TokenType,
    blacklisted: bool = False,
) -> Token:
    record = Token(
        token=token,
        user_id=user_id,
        expires=expires,
        type=token_type,
        blacklisted=blacklisted,
    )
    db.add(record)
    await db.flush()
    return record


async def verify_token(db: AsyncSession, token: str, token_type: TokenType) -> Token:
    """
    Verify a persisted token and return its record.

    The JWT must decode with the expected type, and a non-blacklisted record
    with the same token string, type and owner must exist.

    Raises:
        AuthenticationError: On any failure, without saying which check failed
    """
    if token_type not in PERSISTED_TOKEN_TYPES:
        raise ValueError(f"{token_type.value} tokens are not persisted")

    payload = decode_token(token, token_type)
    try:
        user_id = int(payload.sub)
    except ValueError:
        raise AuthenticationError()

    result = await db.execute(
        select(Token).where(
            Token.token == token,
            Token.type == token_type,
            Token.user_id == user_id,
            Token.blacklisted.is_(False),
        )
    )
    record = result.scalars().first()
    if record is None:
        raise AuthenticationError()
    return record


async def issue_auth_tokens(db: AsyncSession, user: User) -> Dict[str, Any]:
    """
    Mint an access/refresh pair for a user.

    The refresh token is persisted and recorded as a session, which may
    evict the user's oldest session. The caller commits.
    """
    now = datetime.now(timezone.utc)

    access_expires = now + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = issue_token(user.id, access_expires, TokenType.ACCESS)

    refresh_expires = now + timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS)
    refresh_token = issue_token(user.id, refresh_expires, TokenType.REFRESH)

    await save_token(db, refresh_token, user.id, refresh_expires, TokenType.REFRESH)
    await record_session(db, user.id, refresh_token, refresh_expires)

    return {
        "access": {"token": access_token, "expires": access_expires},
        "refresh": {"token": refresh_token, "expires": refresh_expires},
    }
