"""
Persisted token records.

Only refresh tokens are stored long-lived. A record is blacklisted on logout
or session eviction, and deleted when it is consumed by a refresh.
"""

from datetime import datetime, timezone
from enum import Enum as PyEnum
from typing import TYPE_CHECKING

from sqlalchemy import String, Boolean, DateTime, ForeignKey, Enum, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkpost.core.database import Base

if TYPE_CHECKING:
    from inkpost.models.user import User


class TokenType(str, PyEnum):
    """Tag carried in the signed payload and checked on every verification."""
    ACCESS = "access"
    REFRESH = "refresh"
    RESET_PASSWORD = "resetPassword"
    VERIFY_EMAIL = "verifyEmail"


# Token types that must have a live database record to be honoured
PERSISTED_TOKEN_TYPES = frozenset({
    TokenType.REFRESH,
    TokenType.RESET_PASSWORD,
    TokenType.VERIFY_EMAIL,
})


class Token(Base):
    __tablename__ = "tokens"
    __table_args__ = (
        Index("ix_tokens_user_type", "user_id", "type"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    token: Mapped[str] = mapped_column(String(512), index=True, nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    type: Mapped[TokenType] = mapped_column(Enum(TokenType), nullable=False)
    expires: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    blacklisted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    user: Mapped["User"] = relationship("User", back_populates="tokens")

    def __repr__(self) -> str:
        return f"<Token {self.type.value} user={self.user_id} blacklisted={self.blacklisted}>"
