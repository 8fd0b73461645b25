"""
Session ledger: bounds the number of live refresh sessions per user.

Each login or refresh records a session next to its refresh-token record.
When a user goes over MAX_SESSIONS_PER_USER the oldest session is removed
and its refresh token blacklisted, so it can no longer be exchanged.

There is no in-process state here. Every mutation is a write through the
caller's AsyncSession, and the caller owns the commit.
"""

from datetime import datetime, timezone
from typing import List

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.core.config import MAX_SESSIONS_PER_USER
from inkpost.logging import get_logger
from inkpost.models.session import Session
from inkpost.models.token import Token, TokenType

logger = get_logger(__name__)


async def list_sessions(db: AsyncSession, user_id: int) -> List[Session]:
    """Sessions for a user, oldest first; insertion order breaks timestamp ties."""
    result = await db.execute(
        select(Session)
        .where(Session.user_id == user_id)
        .order_by(Session.created_at.asc(), Session.id.asc())
    )
    return list(result.scalars().all())


async def blacklist_refresh_token(db: AsyncSession, refresh_token: str, user_id: int) -> None:
    await db.execute(
        update(Token)
        .where(
            Token.token == refresh_token,
            Token.user_id == user_id,
            Token.type == TokenType.REFRESH,
        )
        .values(blacklisted=True, updated_at=datetime.now(timezone.utc))
    )


async def record_session(
    db: AsyncSession,
    user_id: int,
    refresh_token: str,
    expires: datetime,
    max_sessions: int = MAX_SESSIONS_PER_USER,
) -> Session:
    """
    Record a new session and evict the oldest one if the user is over the cap.

    Only one session is evicted per call: sessions are added one at a time,
    so an earlier call already brought the user down to the cap.
    """
    session = Session(
        user_id=user_id,
        token=refresh_token,
        expires=expires,
        created_at=datetime.now(timezone.utc),
    )
    db.add(session)
    await db.flush()

    sessions = await list_sessions(db, user_id)
    if len(sessions) > max_sessions:
        oldest = sessions[0]
        await db.execute(delete(Session).where(Session.id == oldest.id))
        await blacklist_refresh_token(db, oldest.token, user_id)
        logger.info(
            "session_evicted",
            user_id=user_id,
            evicted_session_id=oldest.id,
            live_sessions=len(sessions) - 1,
        )

    return session


async def revoke_session(db: AsyncSession, refresh_token: str, user_id: int) -> None:
    """Delete the session bound to a refresh token and blacklist the token."""
    await db.execute(
        delete(Session).where(
            Session.token == refresh_token,
            Session.user_id == user_id,
        )
    )
    await blacklist_refresh_token(db, refresh_token, user_id)


async def consume_session(db: AsyncSession, refresh_token: str, user_id: int) -> None:
    """Drop a session and its refresh-token record once the token is exchanged."""
    await db.execute(
        delete(Session).where(
            Session.token == refresh_token,
            Session.user_id == user_id,
        )
    )
    await db.execute(
        delete(Token).where(
            Token.token == refresh_token,
            Token.user_id == user_id,
            Token.type == TokenType.REFRESH,
        )
    )
