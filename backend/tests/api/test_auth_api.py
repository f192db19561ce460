from fastapi.testclient import TestClient

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, auth_header, register
from tvtracker.db.database import create_db_engine, create_session_factory, init_db
from tvtracker.domain.models import User
from tvtracker.main import create_app
from tvtracker.repositories import SQLAlchemyUserRepo


def test_register_returns_user_and_token(client):
    body = register(client, email="New@Example.com", username="  newuser  ")

    assert body["token"]
    assert body["tokenType"] == "bearer"
    assert body["user"]["email"] == "new@example.com"
    assert body["user"]["username"] == "newuser"
    assert body["user"]["role"] == "user"
    assert "hashedPassword" not in body["user"]


def test_register_duplicate_email(client):
    register(client)

    response = client.post(
        "/auth/register",
        json={"email": "user@example.com", "username": "another", "password": "password123"}
    )

    assert response.status_code == 409
    assert response.json()["code"] == "USER_EXISTS"


def test_register_validation_details(client):
    response = client.post("/auth/register", json={"email": "not-an-email", "username": "ab", "password": "123"})

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    fields = {detail["field"] for detail in body["details"]}
    assert fields == {"email", "username", "password"}


def test_login(client):
    register(client)

    response = client.post("/auth/login", json={"email": "USER@example.com", "password": "password123"})

    assert response.status_code == 200
    assert response.json()["user"]["username"] == "someuser"


def test_login_wrong_password(client):
    register(client)

    response = client.post("/auth/login", json={"email": "user@example.com", "password": "wrong-password"})

    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_CREDENTIALS"


def test_bootstrapped_admin(client, admin_token):
    response = client.get("/auth/me", headers=auth_header(admin_token))

    assert response.status_code == 200
    assert response.json()["email"] == ADMIN_EMAIL
    assert response.json()["role"] == "admin"


def test_me_requires_token(client):
    response = client.get("/auth/me")

    assert response.status_code == 401
    assert response.json()["code"] == "AUTH_TOKEN_REQUIRED"


def test_me_rejects_bad_token(client):
    response = client.get("/auth/me", headers=auth_header("not.a.token"))

    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_TOKEN"


def test_error_body_carries_stack_outside_production(client):
    response = client.get("/auth/me")

    assert "stack" in response.json()


def test_update_profile(client, user_token):
    response = client.patch("/auth/me", json={"username": "renamed"}, headers=auth_header(user_token))

    assert response.status_code == 200
    assert response.json()["username"] == "renamed"


def test_change_password(client, user_token):
    response = client.post(
        "/auth/me/password",
        json={"currentPassword": "password123", "newPassword": "new-password"},
        headers=auth_header(user_token)
    )
    assert response.status_code == 204

    old = client.post("/auth/login", json={"email": "user@example.com", "password": "password123"})
    new = client.post("/auth/login", json={"email": "user@example.com", "password": "new-password"})
    assert old.status_code == 401
    assert new.status_code == 200


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "connected"}


def test_register_rejects_password_past_bcrypt_limit(client):
    response = client.post(
        "/auth/register",
        json={"email": "long@example.com", "username": "longpass", "password": "a" * 73}
    )

    assert response.status_code == 400
    assert [detail["field"] for detail in response.json()["details"]] == ["password"]


def test_change_password_rejects_password_past_bcrypt_limit(client, user_token):
    response = client.post(
        "/auth/me/password",
        json={"currentPassword": "password123", "newPassword": "é" * 40},
        headers=auth_header(user_token)
    )

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "newPassword"


def test_unknown_route(client):
    response = client.get("/no-such-route")

    assert response.status_code == 404
    body = response.json()
    assert body["code"] == "NOT_FOUND"
    assert body["message"] == "Route not found"
    assert body["details"] == {"method": "GET", "path": "/no-such-route"}
    assert "detail" not in body


def test_wrong_method(client):
    response = client.put("/ratings/1")

    assert response.status_code == 405
    assert response.json()["code"] == "METHOD_NOT_ALLOWED"
    assert "PATCH" in response.headers["allow"]


def test_startup_with_taken_admin_username(settings):
    engine = create_db_engine(settings.database_url)
    init_db(engine)
    db = create_session_factory(engine)()
    try:
        SQLAlchemyUserRepo(db).create(User(username=settings.admin_username, email="first@example.com",
                                           hashed_password="x"))
    finally:
        db.close()

    with TestClient(create_app(settings, engine)) as client:
        assert client.get("/health").status_code == 200
        login = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
        assert login.status_code == 401
