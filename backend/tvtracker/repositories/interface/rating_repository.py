from abc import ABC, abstractmethod
from typing import Dict, Optional

from tvtracker.domain.models import Page, Rating, TargetType


class RatingRepository(ABC):
    @abstractmethod
    def get_by_id(self, rating_id: int) -> Optional["Rating"]:
        pass

    @abstractmethod
    def get_by_author_and_target(self, author_id: int, target_type: TargetType, target_id: int) -> Optional["Rating"]:
        pass

    @abstractmethod
    def list_by_author(self, author_id: int, page: int, limit: int) -> Page["Rating"]:
        pass

    @abstractmethod
    def add_rating(self, rating: Rating) -> "Rating":
        pass

    @abstractmethod
    def update_rating(self, rating: Rating) -> "Rating":
        pass

    @abstractmethod
    def delete(self, rating_id: int) -> bool:
        pass

    @abstractmethod
    def get_score_distribution(self, target_type: TargetType, target_id: int) -> Dict[int, int]:
        pass
