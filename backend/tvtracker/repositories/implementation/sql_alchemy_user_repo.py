from sqlalchemy.orm import Session
from typing import Optional
from sqlalchemy.exc import IntegrityError

from tvtracker.domain.models import Role, User
from tvtracker.db.models import UserORM
from tvtracker.repositories.interface.user_repository import UserRepository
from tvtracker.exceptions.repository import (
    EntityNotFoundException,
    DuplicateEntityException,
    RepositoryOperationException,
)

class SQLAlchemyUserRepo(UserRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_domain(self, user_orm: UserORM) -> User:
        return User(
            id=user_orm.id,
            username=user_orm.username,
            email=user_orm.email,
            hashed_password=user_orm.hashed_password,
            role=Role(user_orm.role),
            created_at=user_orm.created_at,
            updated_at=user_orm.updated_at
        )

    def _to_orm(self, user: User) -> UserORM:
        return UserORM(
            id=user.id,
            username=user.username,
            email=user.email,
            hashed_password=user.hashed_password,
            role=user.role.value
        )

    def get_by_id(self, user_id: int) -> Optional[User]:
        try:
            user_orm = self.session.get(UserORM, user_id)
            return self._to_domain(user_orm) if user_orm else None
        except Exception as e:
            raise RepositoryOperationException(f"Failed to get user by ID: {str(e)}")

    def get_by_username(self, username: str) -> Optional[User]:
        try:
            user_orm = self.session.query(UserORM).filter(UserORM.username == username).first()
            return self._to_domain(user_orm) if user_orm else None
        except Exception as e:
            raise RepositoryOperationException(f"Failed to get user by username: {str(e)}")

    def get_by_email(self, email: str) -> Optional[User]:
        try:
            user_orm = self.session.query(UserORM).filter(UserORM.email == email).first()
            return self._to_domain(user_orm) if user_orm else None
        except Exception as e:
            raise RepositoryOperationException(f"Failed to get user by email: {str(e)}")

    def create(self, user: User) -> User:
        """Create a new user"""
        try:
            user_orm = self._to_orm(user)
            self.session.add(user_orm)
            self.session.commit()
            self.session.refresh(user_orm)
            return self._to_domain(user_orm)
        except IntegrityError:
            self.session.rollback()
            raise DuplicateEntityException("User already exists with these credentials")
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to create user: {str(e)}")

    def update(self, user: User) -> User:
        try:
            user_orm = self.session.get(UserORM, user.id)
            if not user_orm:
                raise EntityNotFoundException(f"User {user.id} not found")

            user_orm.username = user.username
            user_orm.email = user.email
            user_orm.hashed_password = user.hashed_password
            user_orm.role = user.role.value

            self.session.commit()
            self.session.refresh(user_orm)
            return self._to_domain(user_orm)
        except EntityNotFoundException:
            raise
        except IntegrityError:
            self.session.rollback()
            raise DuplicateEntityException("User with these credentials already exists")
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to update user: {str(e)}")
