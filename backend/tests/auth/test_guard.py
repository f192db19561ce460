import pytest
from unittest.mock import Mock

from tvtracker.auth.guard import AccessGuard, authorize, authorize_owner_or_role
from tvtracker.auth.tokens import TokenService
from tvtracker.domain.models import Identity, Role, User
from tvtracker.exceptions.auth import (
    InsufficientRoleError,
    InvalidTokenError,
    MissingTokenError,
    UnknownSubjectError
)


@pytest.fixture
def token_service():
    return TokenService(secret_key="test-secret")


@pytest.fixture
def mock_user_repo():
    return Mock()


@pytest.fixture
def guard(token_service, mock_user_repo):
    return AccessGuard(token_service, mock_user_repo)


@pytest.fixture
def alice():
    return User(id=1, username="alice", email="alice@example.com", hashed_password="x", role=Role.USER)


def test_authenticate_without_token(guard):
    with pytest.raises(MissingTokenError):
        guard.authenticate(None)
    with pytest.raises(MissingTokenError):
        guard.authenticate("")


def test_authenticate_with_invalid_token(guard, mock_user_repo):
    with pytest.raises(InvalidTokenError):
        guard.authenticate("garbage")
    mock_user_repo.get_by_id.assert_not_called()


def test_authenticate_unknown_subject(guard, token_service, mock_user_repo):
    """A valid token for a deleted account is rejected."""
    mock_user_repo.get_by_id.return_value = None
    token = token_service.issue(99, "ghost@example.com", Role.USER)

    with pytest.raises(UnknownSubjectError):
        guard.authenticate(token)
    mock_user_repo.get_by_id.assert_called_once_with(99)


def test_authenticate_success(guard, token_service, mock_user_repo, alice):
    mock_user_repo.get_by_id.return_value = alice
    token = token_service.issue(alice.id, alice.email, alice.role)

    identity = guard.authenticate(token)

    assert identity == Identity(subject_id=1, email="alice@example.com", role=Role.USER)


def test_authenticate_uses_current_role(guard, token_service, mock_user_repo, alice):
    """A role change applies even to tokens issued before it."""
    token = token_service.issue(alice.id, alice.email, Role.USER)
    alice.role = Role.ADMIN
    mock_user_repo.get_by_id.return_value = alice

    assert guard.authenticate(token).role == Role.ADMIN


def test_optional_authenticate_never_rejects(guard, token_service, mock_user_repo, alice):
    assert guard.optional_authenticate(None) is None
    assert guard.optional_authenticate("garbage") is None

    mock_user_repo.get_by_id.return_value = None
    assert guard.optional_authenticate(token_service.issue(5, "x@example.com", Role.USER)) is None

    mock_user_repo.get_by_id.return_value = alice
    identity = guard.optional_authenticate(token_service.issue(alice.id, alice.email, alice.role))
    assert identity.subject_id == alice.id


def test_authorize_by_role():
    admin = Identity(subject_id=1, email="admin@example.com", role=Role.ADMIN)
    user = Identity(subject_id=2, email="user@example.com", role=Role.USER)

    authorize(admin, [Role.ADMIN])
    authorize(user, [Role.ADMIN, Role.USER])

    with pytest.raises(InsufficientRoleError) as exc_info:
        authorize(user, [Role.ADMIN])
    assert exc_info.value.status_code == 403
    assert exc_info.value.details == {"required": ["admin"], "current": "user"}


def test_authorize_owner_or_role():
    owner = Identity(subject_id=1, email="owner@example.com", role=Role.USER)
    other = Identity(subject_id=2, email="other@example.com", role=Role.USER)
    admin = Identity(subject_id=3, email="admin@example.com", role=Role.ADMIN)

    authorize_owner_or_role(owner, 1, [Role.ADMIN])
    authorize_owner_or_role(admin, 1, [Role.ADMIN])

    with pytest.raises(InsufficientRoleError):
        authorize_owner_or_role(other, 1, [Role.ADMIN])
