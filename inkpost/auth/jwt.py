"""
JWT signing and stateless verification.

Every token carries:
- sub: user id
- iat / exp: issue and expiry times (unix seconds)
- type: TokenType tag, checked on every decode
- jti: random nonce so two tokens minted in the same second never collide
"""

import secrets
from datetime import datetime, timezone
from typing import Optional

from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import BaseModel

from inkpost.core.config import JWT_SECRET_KEY, JWT_ALGORITHM
from inkpost.core.errors import AuthenticationError, ConfigurationError
from inkpost.models.token import TokenType


class TokenPayload(BaseModel):
    """Decoded JWT claims."""
    sub: str                # User ID (subject)
    type: TokenType
    iat: datetime           # Issued at
    exp: datetime           # Expiration
    jti: Optional[str] = None


def issue_token(
    user_id: int | str,
    expires: datetime,
    token_type: TokenType,
    secret: Optional[str] = None,
) -> str:
    """
    Sign a token for a user.

    Args:
        user_id: The user's database ID
        expires: Absolute expiry time (timezone-aware)
        token_type: Tag placed in the `type` claim
        secret: Signing key, defaults to JWT_SECRET_KEY

    Returns:
        Encoded JWT string

    Raises:
        ConfigurationError: If no signing key is available
    """
    key = JWT_SECRET_KEY if secret is None else secret
    if not key:
        raise ConfigurationError("JWT signing secret is not configured")

    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int(expires.timestamp()),
        "type": TokenType(token_type).value,
        "jti": secrets.token_urlsafe(16),
    }
    return jwt.encode(payload, key, algorithm=JWT_ALGORITHM)


def decode_token(
    token: str,
    expected_type: TokenType,
    secret: Optional[str] = None,
) -> TokenPayload:
    """
    Verify signature, expiry and type tag of a token.

    Raises:
        AuthenticationError: If the token is malformed, forged, expired,
            or carries a different type
    """
    key = JWT_SECRET_KEY if secret is None else secret
    if not key:
        raise ConfigurationError("JWT signing secret is not configured")
    if not token:
        raise AuthenticationError()

    try:
        payload = jwt.decode(token, key, algorithms=[JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise AuthenticationError()
    except JWTError:
        raise AuthenticationError()

    try:
        token_type = TokenType(payload.get("type"))
    except ValueError:
        raise AuthenticationError()
    if token_type != expected_type:
        raise AuthenticationError()

    sub = payload.get("sub")
    if not sub or "iat" not in payload or "exp" not in payload:
        raise AuthenticationError()

    return TokenPayload(
        sub=str(sub),
        type=token_type,
        iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        jti=payload.get("jti"),
    )
