from abc import ABC, abstractmethod
from typing import List, Optional

from tvtracker.domain.models import Episode, EpisodeFilter, Page, Season


class SeasonRepository(ABC):
    @abstractmethod
    def get_by_id(self, season_id: int) -> Optional["Season"]:
        pass

    @abstractmethod
    def list_for_series(self, series_id: int) -> List["Season"]:
        pass

    @abstractmethod
    def create(self, season: "Season") -> "Season":
        pass

    @abstractmethod
    def delete(self, season_id: int) -> bool:
        pass


class EpisodeRepository(ABC):
    @abstractmethod
    def get_by_id(self, episode_id: int) -> Optional["Episode"]:
        pass

    @abstractmethod
    def list(self, episode_filter: EpisodeFilter, page: int, limit: int) -> Page["Episode"]:
        pass

    @abstractmethod
    def create(self, episode: "Episode") -> "Episode":
        pass

    @abstractmethod
    def delete(self, episode_id: int) -> bool:
        pass
