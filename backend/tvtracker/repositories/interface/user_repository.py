from abc import ABC, abstractmethod
from typing import Optional

from tvtracker.domain.models import User


class UserRepository(ABC):
    @abstractmethod
    def get_by_id(self, user_id: int) -> Optional["User"]:
        pass

    @abstractmethod
    def get_by_username(self, username: str) -> Optional["User"]:
        pass

    @abstractmethod
    def get_by_email(self, email: str) -> Optional["User"]:
        pass

    @abstractmethod
    def create(self, user: "User") -> "User":
        pass

    @abstractmethod
    def update(self, user: "User") -> "User":
        pass
