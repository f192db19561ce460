from abc import ABC, abstractmethod
from typing import Optional

from tvtracker.domain.models import Movie, MovieFilter, Page


class MovieRepository(ABC):
    @abstractmethod
    def get_by_id(self, movie_id: int) -> Optional["Movie"]:
        pass

    @abstractmethod
    def exists(self, movie_id: int) -> bool:
        pass

    @abstractmethod
    def list(self, movie_filter: MovieFilter, page: int, limit: int) -> Page["Movie"]:
        pass

    @abstractmethod
    def create(self, movie: "Movie") -> "Movie":
        pass

    @abstractmethod
    def update(self, movie: "Movie") -> "Movie":
        pass

    @abstractmethod
    def delete(self, movie_id: int) -> bool:
        pass
