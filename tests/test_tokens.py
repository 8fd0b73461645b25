from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from jose import jwt

from inkpost.auth.dependencies import authorize
from inkpost.auth.jwt import issue_token, decode_token
from inkpost.core import config
from inkpost.core.config import JWT_SECRET_KEY, JWT_ALGORITHM
from inkpost.core.errors import AuthenticationError, AuthorizationError, ConfigurationError
from inkpost.models import TokenType, UserRole


def _expires(minutes=15):
    return datetime.now(timezone.utc) + timedelta(minutes=minutes)


def test_refresh_token_round_trip():
    token = issue_token(42, _expires(), TokenType.REFRESH)

    payload = decode_token(token, TokenType.REFRESH)

    assert payload.sub == "42"
    assert payload.type == TokenType.REFRESH
    assert payload.exp > payload.iat


def test_refresh_token_rejected_as_access():
    token = issue_token(42, _expires(), TokenType.REFRESH)

    with pytest.raises(AuthenticationError):
        decode_token(token, TokenType.ACCESS)


def test_access_token_rejected_as_refresh():
    token = issue_token(42, _expires(), TokenType.ACCESS)

    with pytest.raises(AuthenticationError):
        decode_token(token, TokenType.REFRESH)


def test_claims_are_signed_with_configured_secret():
    expires = _expires(30)
    token = issue_token(7, expires, TokenType.ACCESS)

    claims = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])

    assert claims["sub"] == "7"
    assert claims["type"] == "access"
    assert claims["exp"] == int(expires.timestamp())
    assert "iat" in claims


def test_tokens_issued_together_are_distinct():
    expires = _expires()
    first = issue_token(1, expires, TokenType.REFRESH)
    second = issue_token(1, expires, TokenType.REFRESH)

    assert first != second


def test_missing_secret_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        issue_token(1, _expires(), TokenType.ACCESS, secret="")


def test_expired_token_rejected():
    token = issue_token(1, datetime.now(timezone.utc) - timedelta(seconds=5), TokenType.ACCESS)

    with pytest.raises(AuthenticationError):
        decode_token(token, TokenType.ACCESS)


def test_foreign_signature_rejected():
    token = issue_token(1, _expires(), TokenType.ACCESS, secret="some-other-secret")

    with pytest.raises(AuthenticationError):
        decode_token(token, TokenType.ACCESS)


@pytest.mark.parametrize("garbage", ["", "not-a-jwt", "a.b.c"])
def test_malformed_token_rejected(garbage):
    with pytest.raises(AuthenticationError):
        decode_token(garbage, TokenType.ACCESS)


def test_unknown_type_claim_rejected():
    token = jwt.encode(
        {"sub": "1", "iat": 0, "exp": int(_expires().timestamp()), "type": "session"},
        JWT_SECRET_KEY,
        algorithm=JWT_ALGORITHM,
    )

    with pytest.raises(AuthenticationError):
        decode_token(token, TokenType.ACCESS)


def test_authorize_role_membership():
    admin = SimpleNamespace(role=UserRole.ADMIN)
    member = SimpleNamespace(role=UserRole.USER)

    authorize(admin, [UserRole.ADMIN])
    authorize(member, [UserRole.USER, UserRole.ADMIN])
    authorize(member, [])

    with pytest.raises(AuthorizationError):
        authorize(member, [UserRole.ADMIN])


@pytest.mark.parametrize("email", ["admin@inkpost.test", "not-an-email"])
def test_unusable_bootstrap_email_fails_startup(monkeypatch, email):
    monkeypatch.setattr(config, "BOOTSTRAP_ADMIN_EMAIL", email)

    with pytest.raises(ConfigurationError):
        config.validate_settings()


def test_valid_settings_pass():
    config.validate_settings()
