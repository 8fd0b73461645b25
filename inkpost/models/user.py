"""
User model and role enumeration.

Security considerations:
- Passwords are hashed with Argon2id and never serialized
- Email is unique and stored lower-cased
- All timestamps use UTC
"""

from datetime import datetime, timezone
from enum import Enum as PyEnum
from typing import List, TYPE_CHECKING

from sqlalchemy import String, Boolean, DateTime, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkpost.auth.password import hash_password, verify_password, needs_rehash
from inkpost.core.database import Base

if TYPE_CHECKING:
    from inkpost.models.session import Session
    from inkpost.models.token import Token


class UserRole(str, PyEnum):
    """Closed set of roles. No hierarchy: authorization is set membership."""
    USER = "user"
    ADMIN = "admin"


class UserStatus(str, PyEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Authentication
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Profile
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[UserRole] = mapped_column(Enum(UserRole), nullable=False, default=UserRole.USER)

    # Account status
    status: Mapped[UserStatus] = mapped_column(
        Enum(UserStatus), nullable=False, default=UserStatus.ACTIVE
    )
    is_email_verified: Mapped[bool] = mapped_column(Boolean, default=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    tokens: Mapped[List["Token"]] = relationship(
        "Token", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    sessions: Mapped[List["Session"]] = relationship(
        "Session", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<User {self.email}>"

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    def set_password(self, password: str) -> None:
        """Hash and set password using Argon2id."""
        self.password_hash = hash_password(password)

    def verify_password(self, password: str) -> bool:
        """
        Verify password against stored hash.
        Upgrades the stored hash in place when the Argon2 parameters changed.
        """
        if not verify_password(password, self.password_hash):
            return False
        if needs_rehash(self.password_hash):
            self.set_password(password)
        return True
