import pytest
from datetime import datetime, timedelta, timezone
from jose import jwt

from tvtracker.auth.tokens import TokenService
from tvtracker.domain.models import Role
from tvtracker.exceptions.api import AuthenticationError
from tvtracker.exceptions.auth import InvalidTokenError

SECRET = "test-secret"


@pytest.fixture
def token_service():
    return TokenService(secret_key=SECRET, algorithm="HS256", expire_minutes=60)


def test_issue_and_verify_round_trip(token_service):
    token = token_service.issue(subject_id=42, email="alice@example.com", role=Role.ADMIN)

    payload = token_service.verify(token)

    assert payload.subject_id == 42
    assert payload.email == "alice@example.com"
    assert payload.role == Role.ADMIN
    assert payload.expires_at > payload.issued_at


def test_token_lifetime_follows_configuration():
    service = TokenService(secret_key=SECRET, expire_minutes=30)
    payload = service.verify(service.issue(subject_id=1, email="a@example.com", role=Role.USER))

    assert payload.expires_at - payload.issued_at == timedelta(minutes=30)


def test_expired_token_is_rejected(token_service):
    token = token_service.issue(1, "alice@example.com", Role.USER, expires_delta=timedelta(seconds=-10))

    with pytest.raises(InvalidTokenError):
        token_service.verify(token)


def test_token_signed_with_other_key_is_rejected(token_service):
    other = TokenService(secret_key="rotated-secret")
    token = other.issue(1, "alice@example.com", Role.USER)

    with pytest.raises(InvalidTokenError):
        token_service.verify(token)


def test_garbage_token_is_rejected(token_service):
    with pytest.raises(InvalidTokenError):
        token_service.verify("not.a.token")


@pytest.mark.parametrize("claims", [
    {"email": "alice@example.com", "role": "user"},
    {"sub": "1", "role": "user"},
    {"sub": "1", "email": "alice@example.com"},
    {"sub": "1", "email": "alice@example.com", "role": "superuser"},
    {"sub": "abc", "email": "alice@example.com", "role": "user"},
])
def test_malformed_payload_is_rejected(token_service, claims):
    claims = dict(claims, exp=datetime.now(timezone.utc) + timedelta(minutes=5))
    token = jwt.encode(claims, SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        token_service.verify(token)


def test_token_without_expiry_is_rejected(token_service):
    token = jwt.encode({"sub": "1", "email": "alice@example.com", "role": "user"}, SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        token_service.verify(token)


def test_invalid_token_is_an_authentication_error():
    assert issubclass(InvalidTokenError, AuthenticationError)
    assert InvalidTokenError().status_code == 401


def test_signing_key_is_required():
    with pytest.raises(ValueError):
        TokenService(secret_key="")
