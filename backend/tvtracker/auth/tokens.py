from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from tvtracker.domain.models import Role
from tvtracker.exceptions.auth import InvalidTokenError


class TokenPayload:
    def __init__(self, subject_id: int, email: str, role: Role,
                 issued_at: Optional[datetime] = None, expires_at: Optional[datetime] = None):
        self.subject_id = subject_id
        self.email = email
        self.role = role
        self.issued_at = issued_at
        self.expires_at = expires_at


class TokenService:
    """Issues and verifies signed, time-limited bearer tokens."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 7 * 24 * 60):
        if not secret_key:
            raise ValueError("A signing key is required")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expire_minutes)

    def issue(self, subject_id: int, email: str, role: Role, expires_delta: Optional[timedelta] = None) -> str:
        issued_at = datetime.now(timezone.utc)
        expire = issued_at + (expires_delta if expires_delta is not None else self.expires_delta)

        to_encode = {
            "sub": str(subject_id),
            "email": email,
            "role": Role(role).value,
            "iat": issued_at,
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenPayload:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            raise InvalidTokenError()

        subject = payload.get("sub")
        email = payload.get("email")
        role = payload.get("role")
        if payload.get("exp") is None:
            raise InvalidTokenError("Token has no expiry")
        if not isinstance(subject, str) or not isinstance(email, str) or not isinstance(role, str):
            raise InvalidTokenError("Malformed token payload")

        try:
            subject_id = int(subject)
            role = Role(role)
        except ValueError:
            raise InvalidTokenError("Malformed token payload")

        return TokenPayload(
            subject_id=subject_id,
            email=email,
            role=role,
            issued_at=_from_timestamp(payload.get("iat")),
            expires_at=_from_timestamp(payload.get("exp")),
        )


def _from_timestamp(value) -> Optional[datetime]:
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    return None
