"""
Authentication and Authorization module.

Provides:
- JWT token signing and verification
- Password hashing (Argon2id)
- Session ledger (inkpost.auth.sessions)
- FastAPI guards (inkpost.auth.dependencies)
"""

from inkpost.auth.password import (
    hash_password,
    verify_password,
    needs_rehash,
)
from inkpost.auth.jwt import (
    issue_token,
    decode_token,
    TokenPayload,
)

__all__ = [
    # Password
    "hash_password",
    "verify_password",
    "needs_rehash",
    # JWT
    "issue_token",
    "decode_token",
    "TokenPayload",
]
