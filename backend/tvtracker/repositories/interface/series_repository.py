from abc import ABC, abstractmethod
from typing import Optional

from tvtracker.domain.models import Page, Series, SeriesFilter


class SeriesRepository(ABC):
    @abstractmethod
    def get_by_id(self, series_id: int) -> Optional["Series"]:
        pass

    @abstractmethod
    def exists(self, series_id: int) -> bool:
        pass

    @abstractmethod
    def list(self, series_filter: SeriesFilter, page: int, limit: int) -> Page["Series"]:
        pass

    @abstractmethod
    def create(self, series: "Series") -> "Series":
        pass

    @abstractmethod
    def update(self, series: "Series") -> "Series":
        pass

    @abstractmethod
    def delete(self, series_id: int) -> bool:
        pass
