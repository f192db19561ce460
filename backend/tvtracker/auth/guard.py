import logging
from typing import Iterable, Optional

from tvtracker.auth.tokens import TokenService
from tvtracker.domain.models import Identity, Role
from tvtracker.exceptions.api import AuthenticationError
from tvtracker.exceptions.auth import InsufficientRoleError, MissingTokenError, UnknownSubjectError
from tvtracker.repositories import UserRepository

logger = logging.getLogger(__name__)


class AccessGuard:
    """Turns a bearer token into the identity of the caller."""

    def __init__(self, token_service: TokenService, user_repository: UserRepository):
        self.token_service = token_service
        self.user_repository = user_repository

    def authenticate(self, token: Optional[str]) -> Identity:
        if not token:
            raise MissingTokenError()

        payload = self.token_service.verify(token)

        # the account may have been removed after the token was issued
        user = self.user_repository.get_by_id(payload.subject_id)
        if user is None:
            logger.warning(f"Token presented for unknown user {payload.subject_id}")
            raise UnknownSubjectError()

        # role and email come from the stored record, not the token snapshot
        return Identity(subject_id=user.id, email=user.email, role=user.role)

    def optional_authenticate(self, token: Optional[str]) -> Optional[Identity]:
        if not token:
            return None
        try:
            return self.authenticate(token)
        except AuthenticationError:
            return None


def authorize(identity: Identity, required_roles: Iterable[Role]) -> None:
    required = {Role(role) for role in required_roles}
    if identity.role not in required:
        raise InsufficientRoleError(
            details={
                "required": sorted(role.value for role in required),
                "current": identity.role.value
            }
        )


def authorize_owner_or_role(identity: Identity, owner_id: int, required_roles: Iterable[Role]) -> None:
    if identity.subject_id == owner_id:
        return
    authorize(identity, required_roles)
