"""
Typed errors raised by services and auth dependencies.

Each ApiError carries the HTTP status it maps to; the handlers in
inkpost.core.handlers turn them into the standard response envelope.
"""

from typing import Any, Optional


class ConfigurationError(RuntimeError):
    """Fatal misconfiguration detected at startup."""


class ApiError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code: int = 400
    error_code: str = "bad_request"
    default_message: str = "Bad request"

    def __init__(self, message: Optional[str] = None, *, details: Optional[Any] = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class AuthenticationError(ApiError):
    """Missing, invalid or revoked credentials (401)."""

    status_code = 401
    error_code = "unauthorized"
    default_message = "Please authenticate"


class AuthorizationError(ApiError):
    """Authenticated, but the role is not allowed (403)."""

    status_code = 403
    error_code = "forbidden"
    default_message = "Forbidden"


class NotFoundError(ApiError):
    status_code = 404
    error_code = "not_found"
    default_message = "Not found"


class ConflictError(ApiError):
    """Uniqueness violation such as a taken email or slug."""

    status_code = 400
    error_code = "bad_request"
    default_message = "Already exists"
