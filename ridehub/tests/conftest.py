"""
Shared fixtures for the RideHub test suite.

Every test gets a fresh application wired to its own store. API tests run
against both store backends.
"""

import itertools
from typing import Any, Dict, Optional

import pytest
from fastapi.testclient import TestClient

from ridehub.config import Settings
from ridehub.main import create_app
from ridehub.store.memory import InMemoryStore
from ridehub.store.sql import SQLStore

ADMIN_EMAIL = "admin@ridehub.test"
ADMIN_PASSWORD = "admin-password"
PASSWORD = "s3cret-password"

_emails = itertools.count(1)


def auth_header(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def signup_payload(role: str = "rider", email: Optional[str] = None, **overrides) -> Dict[str, Any]:
    """Build a valid signup body with a unique email."""
    payload = {
        "email": email or f"{role}{next(_emails)}@ridehub.test",
        "password": PASSWORD,
        "firstName": "Test",
        "lastName": role.capitalize(),
        "phoneNumber": "5551234567",
        "role": role,
    }
    payload.update(overrides)
    return payload


def sign_up(client: TestClient, role: str = "rider", **overrides) -> Dict[str, Any]:
    """Sign up through the API and return the response body."""
    response = client.post("/api/auth/signup", json=signup_payload(role, **overrides))
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def settings():
    return Settings(
        PASSWORD_HASH_ITERATIONS=1000,
        ADMIN_EMAIL=ADMIN_EMAIL,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """A fresh store of each backend."""
    if request.param == "memory":
        backend = InMemoryStore()
    else:
        backend = SQLStore("sqlite:///:memory:")
        backend.create_schema()
    yield backend
    backend.close()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def admin_token(client):
    response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200, response.text
    return response.json()["accessToken"]


@pytest.fixture
def rider(client):
    return sign_up(client, "rider")


@pytest.fixture
def driver(client):
    return sign_up(client, "driver")
