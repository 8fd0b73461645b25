"""
Inkpost - blog platform API

Main FastAPI application.
"""

import secrets
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Callable

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import select, func, text
from starlette.middleware.base import BaseHTTPMiddleware

from inkpost.api.v1.api import api_router
from inkpost.core.config import (
    BOOTSTRAP_ADMIN_EMAIL,
    BOOTSTRAP_ADMIN_PASSWORD,
    IS_PRODUCTION,
    get_cors_allow_origins,
    validate_settings,
)
from inkpost.core.database import async_session_maker, engine, init_db, close_db
from inkpost.core.handlers import register_exception_handlers
from inkpost.logging import get_logger
from inkpost.models import User, UserRole
from inkpost.services.user_service import create_user

logger = get_logger(__name__)

VERSION = "1.0.0"


# =============================================================================
# Application Lifespan (startup/shutdown)
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown events."""
    validate_settings()

    await init_db()
    logger.info("database_initialized")

    await create_bootstrap_admin_if_needed()

    yield

    logger.info("shutting_down")
    await close_db()


async def create_bootstrap_admin_if_needed():
    """Create the first admin from environment settings when no users exist."""
    if not BOOTSTRAP_ADMIN_EMAIL or not BOOTSTRAP_ADMIN_PASSWORD:
        return

    async with async_session_maker() as session:
        result = await session.execute(select(func.count(User.id)))
        if result.scalar() > 0:
            return

        admin = await create_user(
            session,
            name="Administrator",
            email=BOOTSTRAP_ADMIN_EMAIL,
            password=BOOTSTRAP_ADMIN_PASSWORD,
            role=UserRole.ADMIN,
        )
        admin.is_email_verified = True
        await session.commit()
        logger.info("bootstrap_admin_created", user_id=admin.id)


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="Inkpost API",
    version=VERSION,
    description="Blog platform API: accounts, sessions, posts and categories",
    lifespan=lifespan,
    docs_url=None if IS_PRODUCTION else "/docs",
    redoc_url=None if IS_PRODUCTION else "/redoc",
)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID, echoed in the response and bound to log events."""

    async def dispatch(self, request: Request, call_next: Callable):
        request_id = request.headers.get("X-Request-ID") or secrets.token_urlsafe(8)
        request.state.request_id = request_id

        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers["X-Request-ID"] = request_id
        return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(RequestIDMiddleware)

register_exception_handlers(app)


# =============================================================================
# Routes
# =============================================================================

@app.get("/", tags=["root"])
def root():
    """Root endpoint."""
    return {
        "name": "Inkpost API",
        "version": VERSION,
        "docs": "/docs",
    }


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint for load balancers and monitoring."""
    db_status = "healthy"
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("health_check_failed", error=str(e))
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": VERSION,
        "database": db_status,
    }


# Include API routers
app.include_router(api_router, prefix="/v1")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("inkpost.main:app", host="0.0.0.0", port=8000)
