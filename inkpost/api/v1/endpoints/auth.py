"""
Authentication endpoints.

Provides:
- Register (creates a user and signs them in)
- Login (email/password → access + refresh tokens)
- Refresh token rotation
- Logout (revokes the session behind a refresh token)
- Current user profile and live sessions
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.auth.dependencies import get_current_user, get_client_ip
from inkpost.auth.sessions import list_sessions
from inkpost.core.config import (
    IS_PRODUCTION,
    REFRESH_COOKIE_NAME,
    REFRESH_HEADER_NAME,
    REFRESH_TOKEN_EXPIRE_DAYS,
)
from inkpost.core.database import get_db
from inkpost.core.errors import NotFoundError
from inkpost.models import User
from inkpost.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    RefreshTokenRequest,
    LogoutRequest,
    AuthData,
    TokensData,
    SessionsData,
    SessionInfo,
)
from inkpost.schemas.common import ApiResponse
from inkpost.schemas.user import UserData, UserResponse
from inkpost.services import auth_service

router = APIRouter()


def _set_refresh_cookie(response: Response, refresh_token: str) -> None:
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value=refresh_token,
        httponly=True,
        secure=IS_PRODUCTION,
        samesite="lax",
        max_age=REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
    )


@router.post(
    "/register",
    response_model=ApiResponse[AuthData],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Create a regular user account and return a token pair."""
    user, tokens = await auth_service.register(
        db, name=body.name, email=body.email, password=body.password
    )
    _set_refresh_cookie(response, tokens["refresh"]["token"])

    return ApiResponse(
        message="User registered successfully",
        data=AuthData(user=UserResponse.model_validate(user), tokens=tokens),
    )


@router.post("/login", response_model=ApiResponse[AuthData])
async def login(
    request: Request,
    body: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """
    Authenticate user and return JWT tokens.

    The refresh token is also set as an HttpOnly cookie.
    """
    user, tokens = await auth_service.login_with_email_and_password(
        db, body.email, body.password, client_ip=get_client_ip(request)
    )
    _set_refresh_cookie(response, tokens["refresh"]["token"])

    return ApiResponse(
        message="Login successful",
        data=AuthData(user=UserResponse.model_validate(user), tokens=tokens),
    )


@router.post("/refresh-token", response_model=ApiResponse[TokensData])
async def refresh_token(
    body: RefreshTokenRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Exchange a refresh token for a new pair. The presented token is consumed."""
    tokens = await auth_service.refresh_auth(db, body.refresh_token)
    _set_refresh_cookie(response, tokens["refresh"]["token"])

    return ApiResponse(message="Tokens refreshed successfully", data=TokensData(tokens=tokens))


@router.post("/logout", response_model=ApiResponse)
async def logout(
    request: Request,
    response: Response,
    body: Optional[LogoutRequest] = Body(default=None),
    db: AsyncSession = Depends(get_db),
):
    """
    Revoke the session behind a refresh token.

    The token is read from, in order:
    1. Request body `refreshToken`
    2. `X-Refresh-Token` header
    3. `refresh_token` cookie
    """
    token = (
        (body.refresh_token if body else None)
        or request.headers.get(REFRESH_HEADER_NAME)
        or request.cookies.get(REFRESH_COOKIE_NAME)
    )
    if not token:
        raise NotFoundError("Not found")

    await auth_service.logout(db, token)
    response.delete_cookie(REFRESH_COOKIE_NAME)

    return ApiResponse(message="Logout successful")


@router.get("/me", response_model=ApiResponse[UserData])
async def get_current_user_info(
    current_user: User = Depends(get_current_user),
):
    """Get current user's profile information."""
    return ApiResponse(
        message="User retrieved successfully",
        data=UserData(user=UserResponse.model_validate(current_user)),
    )


@router.get("/sessions", response_model=ApiResponse[SessionsData])
async def get_sessions(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List the caller's live refresh sessions, oldest first."""
    sessions = await list_sessions(db, current_user.id)
    return ApiResponse(
        message="Sessions retrieved successfully",
        data=SessionsData(sessions=[SessionInfo.model_validate(s) for s in sessions]),
    )
