import os
import sys
import tempfile
import uuid

import pytest

# Add project root to sys.path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Set up environment variables before importing app
_test_dir = tempfile.mkdtemp(prefix="inkpost_test_")
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_test_dir, 'test.db')}"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["REFRESH_TOKEN_EXPIRE_DAYS"] = "30"
os.environ["MAX_SESSIONS_PER_USER"] = "2"
os.environ["BOOTSTRAP_ADMIN_EMAIL"] = "admin@inkpost.example.com"
os.environ["BOOTSTRAP_ADMIN_PASSWORD"] = "Admin#Passw0rd"
os.environ["LOG_JSON"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from fastapi.testclient import TestClient  # noqa: E402

from inkpost.main import app  # noqa: E402

ADMIN_EMAIL = os.environ["BOOTSTRAP_ADMIN_EMAIL"]
ADMIN_PASSWORD = os.environ["BOOTSTRAP_ADMIN_PASSWORD"]
USER_PASSWORD = "Str0ng!Pass"


@pytest.fixture(scope="session")
def client():
    # Entering the context runs the lifespan: tables + bootstrap admin
    with TestClient(app) as c:
        yield c


def unique_email(prefix: str = "user") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:10]}@example.com"


def register(client, email=None, password=USER_PASSWORD, name="Test User") -> dict:
    email = email or unique_email()
    response = client.post(
        "/v1/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    data = response.json()["data"]
    data["email"] = email
    data["password"] = password
    return data


def login(client, email, password=USER_PASSWORD):
    return client.post("/v1/auth/login", json={"email": email, "password": password})


def bearer(access_token: str) -> dict:
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def user(client):
    """A freshly registered regular user (one session already recorded)."""
    return register(client)


@pytest.fixture
def admin_headers(client):
    response = login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
    assert response.status_code == 200, response.text
    return bearer(response.json()["data"]["tokens"]["access"]["token"])


@pytest.fixture
def user_headers(user):
    return bearer(user["tokens"]["access"]["token"])
