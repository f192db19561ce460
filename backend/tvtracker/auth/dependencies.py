from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from tvtracker.auth.guard import AccessGuard, authorize
from tvtracker.db.database import get_db
from tvtracker.domain.models import Identity, Role
from tvtracker.repositories import SQLAlchemyUserRepo

# auto_error is off so a missing header maps to our own error body
bearer_scheme = HTTPBearer(auto_error=False)


def _token(credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    return credentials.credentials if credentials else None


def get_access_guard(request: Request, db: Session = Depends(get_db)) -> AccessGuard:
    return AccessGuard(request.app.state.token_service, SQLAlchemyUserRepo(db))


def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    guard: AccessGuard = Depends(get_access_guard)
) -> Identity:
    identity = guard.authenticate(_token(credentials))
    request.state.identity = identity
    return identity


def get_optional_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    guard: AccessGuard = Depends(get_access_guard)
) -> Optional[Identity]:
    identity = guard.optional_authenticate(_token(credentials))
    if identity is not None:
        request.state.identity = identity
    return identity


def require_roles(*roles: Role):
    def dependency(identity: Identity = Depends(get_current_identity)) -> Identity:
        authorize(identity, roles)
        return identity
    return dependency


require_admin = require_roles(Role.ADMIN)
