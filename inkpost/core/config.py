import os
from pathlib import Path

from dotenv import load_dotenv
from email_validator import EmailNotValidError, validate_email

from inkpost.core.errors import ConfigurationError

load_dotenv()

# Base directory of the project (parent of 'inkpost')
BASE_DIR = Path(__file__).resolve().parent.parent.parent

APP_ENV = os.getenv("APP_ENV", "development").lower()
IS_PRODUCTION = APP_ENV == "production"

# Database
DB_DIR = BASE_DIR / "db"
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite+aiosqlite:///{DB_DIR / 'inkpost.db'}")
SQL_DEBUG = os.getenv("SQL_DEBUG", "false").lower() == "true"

# JWT
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "")
JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "30"))

# Concurrent refresh sessions allowed per user
MAX_SESSIONS_PER_USER = int(os.getenv("MAX_SESSIONS_PER_USER", "2"))

# First admin account, created only when the users table is empty
BOOTSTRAP_ADMIN_EMAIL = os.getenv("BOOTSTRAP_ADMIN_EMAIL", "")
BOOTSTRAP_ADMIN_PASSWORD = os.getenv("BOOTSTRAP_ADMIN_PASSWORD", "")

REFRESH_COOKIE_NAME = "refresh_token"
REFRESH_HEADER_NAME = "X-Refresh-Token"

# Ensure DB directory exists for the default SQLite location
os.makedirs(DB_DIR, exist_ok=True)


def get_cors_allow_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "")
    if not raw.strip():
        return [
            "http://localhost:5173",
            "http://localhost:8080",
            "http://localhost:3000",
        ]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def validate_settings() -> None:
    """
    Fail fast on configuration the auth core cannot run without.

    Called once from the application lifespan.
    """
    if not JWT_SECRET_KEY:
        raise ConfigurationError("JWT_SECRET_KEY is not set")
    if ACCESS_TOKEN_EXPIRE_MINUTES <= 0:
        raise ConfigurationError("ACCESS_TOKEN_EXPIRE_MINUTES must be positive")
    if REFRESH_TOKEN_EXPIRE_DAYS <= 0:
        raise ConfigurationError("REFRESH_TOKEN_EXPIRE_DAYS must be positive")
    if MAX_SESSIONS_PER_USER <= 0:
        raise ConfigurationError("MAX_SESSIONS_PER_USER must be positive")
    if BOOTSTRAP_ADMIN_EMAIL:
        # The admin has to get past the same email check as the login endpoint
        try:
            validate_email(BOOTSTRAP_ADMIN_EMAIL, check_deliverability=False)
        except EmailNotValidError as e:
            raise ConfigurationError(f"BOOTSTRAP_ADMIN_EMAIL is not a valid email: {e}")
