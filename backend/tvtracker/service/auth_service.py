import logging
from typing import Optional, Tuple

from tvtracker.auth.password import PasswordHasher
from tvtracker.auth.tokens import TokenService
from tvtracker.config.logging import log_operation
from tvtracker.domain.models import Role, User
from tvtracker.exceptions.api import NotFoundError
from tvtracker.exceptions.auth import UserAlreadyExistsException, InvalidCredentialsException
from tvtracker.exceptions.repository import DuplicateEntityException
from tvtracker.repositories import UserRepository

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    def __init__(self, user_repository: UserRepository, password_hasher: PasswordHasher, token_service: TokenService):
        self.user_repository = user_repository
        self.password_hasher = password_hasher
        self.token_service = token_service

    def register_user(self, email: str, username: str, password: str, role: Role = Role.USER) -> Tuple[User, str]:
        email = normalize_email(email)

        # check if email exists
        if self.user_repository.get_by_email(email):
            raise UserAlreadyExistsException("Email already registered")

        # check if username exists
        if self.user_repository.get_by_username(username):
            raise UserAlreadyExistsException("Username already registered")

        user = User(
            username=username,
            email=email,
            hashed_password=self.password_hasher.hash(password),
            role=role
        )

        # a concurrent registration can still win the race; the unique index settles it
        try:
            user = self.user_repository.create(user)
        except DuplicateEntityException:
            raise UserAlreadyExistsException("A user with this email or username already exists")

        log_operation("REGISTER", user_id=user.id, role=user.role.value)
        return user, self.create_access_token(user)

    def authenticate_user(self, email: str, password: str) -> Tuple[User, str]:
        user = self.user_repository.get_by_email(normalize_email(email))

        if not user or not self.password_hasher.verify(password, user.hashed_password):
            log_operation("LOGIN", user_id=user.id if user else None, success=False)
            raise InvalidCredentialsException()

        log_operation("LOGIN", user_id=user.id, success=True)
        return user, self.create_access_token(user)

    def create_access_token(self, user: User) -> str:
        return self.token_service.issue(subject_id=user.id, email=user.email, role=user.role)

    def get_profile(self, user_id: int) -> User:
        user = self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user_id: int, username: Optional[str] = None, email: Optional[str] = None) -> User:
        user = self.get_profile(user_id)

        if email is not None:
            email = normalize_email(email)
            if email != user.email:
                if self.user_repository.get_by_email(email):
                    raise UserAlreadyExistsException("Email already registered")
                user.email = email

        if username is not None and username != user.username:
            if self.user_repository.get_by_username(username):
                raise UserAlreadyExistsException("Username already registered")
            user.username = username

        try:
            user = self.user_repository.update(user)
        except DuplicateEntityException:
            raise UserAlreadyExistsException("A user with this email or username already exists")

        log_operation("UPDATE_PROFILE", user_id=user.id)
        return user

    def change_password(self, user_id: int, current_password: str, new_password: str) -> None:
        user = self.get_profile(user_id)
        if not self.password_hasher.verify(current_password, user.hashed_password):
            raise InvalidCredentialsException("Current password is incorrect")

        user.hashed_password = self.password_hasher.hash(new_password)
        self.user_repository.update(user)
        log_operation("CHANGE_PASSWORD", user_id=user.id)

    def ensure_admin(self, email: str, username: str, password: str) -> Optional[User]:
        """Create the bootstrap admin account unless the email is already taken.

        Returns None when the admin username belongs to another account.
        """
        existing = self.user_repository.get_by_email(normalize_email(email))
        if existing:
            if not existing.is_admin:
                logger.warning(f"Bootstrap admin email {existing.email} belongs to a non-admin account")
            return existing

        try:
            user, _ = self.register_user(email, username, password, role=Role.ADMIN)
        except UserAlreadyExistsException as e:
            logger.warning(f"Bootstrap admin {normalize_email(email)} not created: {e.message}")
            return None
        logger.info(f"Created admin account {user.email}")
        return user
