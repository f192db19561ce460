from passlib.context import CryptContext

from tvtracker.exceptions.api import ValidationError

# bcrypt ignores everything past this many bytes
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


class PasswordHasher:
    """Salted one-way bcrypt hashing."""

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        if password_too_long(password):
            raise ValidationError(f"Password cannot exceed {MAX_PASSWORD_BYTES} bytes")
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        # no stored digest can belong to an over-long password
        if password_too_long(plain_password):
            return False

        # malformed or unknown digests never match
        try:
            return self._context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            return False
