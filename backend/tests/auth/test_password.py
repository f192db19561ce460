import pytest

from tvtracker.auth.password import PasswordHasher
from tvtracker.exceptions.api import ValidationError


@pytest.fixture
def hasher():
    """Create a hasher with the cheapest bcrypt cost."""
    return PasswordHasher(rounds=4)


def test_hash_is_salted(hasher):
    """Hashing the same password twice gives different digests."""
    first = hasher.hash("password123")
    second = hasher.hash("password123")

    assert first != second
    assert first != "password123"


def test_verify_matching_password(hasher):
    digest = hasher.hash("password123")
    assert hasher.verify("password123", digest) is True


def test_verify_other_password(hasher):
    digest = hasher.hash("password123")
    assert hasher.verify("password124", digest) is False
    assert hasher.verify("", digest) is False


@pytest.mark.parametrize("digest", ["", "not-a-hash", "$2b$04$tooshort"])
def test_verify_malformed_digest_returns_false(hasher, digest):
    """Malformed digests never raise."""
    assert hasher.verify("password123", digest) is False


def test_hash_rejects_passwords_past_bcrypt_limit(hasher):
    with pytest.raises(ValidationError):
        hasher.hash("a" * 73)
    # 37 two-byte characters are 74 bytes
    with pytest.raises(ValidationError):
        hasher.hash("é" * 37)


def test_verify_does_not_match_on_shared_prefix(hasher):
    """Passwords sharing the first 72 bytes of a stored one do not match it."""
    digest = hasher.hash("a" * 72)

    assert hasher.verify("a" * 72, digest) is True
    assert hasher.verify("a" * 72 + "second", digest) is False
