import pytest
from fastapi.testclient import TestClient

from tvtracker.config import Settings
from tvtracker.main import create_app

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "adminpass"


@pytest.fixture
def settings():
    return Settings(
        jwt_secret_key="test-secret",
        bcrypt_rounds=4,
        database_url="sqlite:///:memory:",
        environment="test",
        log_dir=None,
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD
    )


@pytest.fixture
def client(settings):
    """A client against a fresh in-memory database, with the admin account bootstrapped."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def register(client, email="user@example.com", username="someuser", password="password123"):
    response = client.post("/auth/register", json={"email": email, "username": username, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def admin_token(client):
    response = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200, response.text
    return response.json()["token"]


@pytest.fixture
def user_token(client):
    return register(client)["token"]


@pytest.fixture
def movie(client, admin_token):
    response = client.post(
        "/movies",
        json={"title": "The Matrix", "genres": ["Action", "Sci-Fi"], "durationMin": 136, "releaseDate": "1999-03-31"},
        headers=auth_header(admin_token)
    )
    assert response.status_code == 201, response.text
    return response.json()
