"""
Pytest configuration and shared fixtures.

Every test runs against a fresh in-memory SQLite database that the app's own
startup path migrates and seeds.
"""

import os
from datetime import datetime, timedelta

# Must be set before the app (and its engine) is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_DEMO_USERS"] = "true"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.db.base import Base, SessionLocal, engine  # noqa: E402
from app.main import app  # noqa: E402

ADMIN = {"email": "admin@test.com", "password": "admin123"}
EMPLOYEE = {"email": "employee@test.com", "password": "employee123"}
GUEST = {"email": "guest@test.com", "password": "guest123"}


def future_time(days=1, hours=0):
    """ISO datetime string in the future, whole seconds."""
    return (datetime.now() + timedelta(days=days, hours=hours)).replace(microsecond=0).isoformat()


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def login(client, credentials):
    response = client.post("/api/login", json=credentials)
    assert response.status_code == 200, response.text
    return auth_header(response.json()["token"])


@pytest.fixture
def client():
    """TestClient over a freshly migrated and seeded database."""
    Base.metadata.drop_all(bind=engine)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session(client):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def admin_headers(client):
    return login(client, ADMIN)


@pytest.fixture
def employee_headers(client):
    return login(client, EMPLOYEE)


@pytest.fixture
def guest_headers(client):
    return login(client, GUEST)


@pytest.fixture
def test_user_data():
    return {
        "username": "newuser",
        "email": "newuser@example.com",
        "password": "Test123!",
        "phone": "555-0199",
        "address": "12 Test Street",
    }


@pytest.fixture
def registered_user(client, test_user_data):
    """Register a fresh guest; returns the register response body."""
    response = client.post("/api/register", json=test_user_data)
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def user_headers(registered_user):
    return auth_header(registered_user["token"])


@pytest.fixture
def services(client, admin_headers):
    """Default catalog; returns the created services."""
    response = client.post("/api/restore-services", headers=admin_headers)
    assert response.status_code == 200, response.text
    return response.json()["services"]


@pytest.fixture
def order(client, user_headers, services):
    """A pending order placed by the registered user for the first service."""
    response = client.post(
        "/api/orders",
        json={"service_id": services[0]["id"], "scheduled_time": future_time(), "address": "1 Main St"},
        headers=user_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()
