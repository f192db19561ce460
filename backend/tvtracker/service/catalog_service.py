from typing import List

from tvtracker.config.logging import log_operation
from tvtracker.domain.models import Episode, EpisodeFilter, Page, Season
from tvtracker.exceptions.api import ConflictError, NotFoundError
from tvtracker.exceptions.repository import DuplicateEntityException, EntityNotFoundException
from tvtracker.repositories import EpisodeRepository, SeasonRepository, SeriesRepository
from tvtracker.service.media_service import check_pagination


class CatalogService:
    """Seasons and episodes of a series."""

    def __init__(self, series_repository: SeriesRepository, season_repository: SeasonRepository,
                 episode_repository: EpisodeRepository):
        self.series_repository = series_repository
        self.season_repository = season_repository
        self.episode_repository = episode_repository

    def _ensure_series(self, series_id: int):
        if not self.series_repository.exists(series_id):
            raise NotFoundError("Series not found")

    def list_seasons(self, series_id: int) -> List[Season]:
        self._ensure_series(series_id)
        return self.season_repository.list_for_series(series_id)

    def create_season(self, season: Season) -> Season:
        self._ensure_series(season.series_id)
        try:
            season = self.season_repository.create(season)
        except DuplicateEntityException as e:
            raise ConflictError(str(e))

        log_operation("CREATE_SEASON", season_id=season.id, series_id=season.series_id, season_no=season.season_no)
        return season

    def delete_season(self, season_id: int) -> None:
        if not self.season_repository.delete(season_id):
            raise NotFoundError("Season not found")
        log_operation("DELETE_SEASON", season_id=season_id)

    def list_episodes(self, episode_filter: EpisodeFilter, page: int = 1, limit: int = 10) -> Page[Episode]:
        check_pagination(page, limit)
        return self.episode_repository.list(episode_filter, page, limit)

    def get_episode(self, episode_id: int) -> Episode:
        episode = self.episode_repository.get_by_id(episode_id)
        if episode is None:
            raise NotFoundError("Episode not found")
        return episode

    def create_episode(self, episode: Episode) -> Episode:
        try:
            episode = self.episode_repository.create(episode)
        except EntityNotFoundException:
            raise NotFoundError("Season not found")
        except DuplicateEntityException as e:
            raise ConflictError(str(e))

        log_operation("CREATE_EPISODE", episode_id=episode.id, season_id=episode.season_id, ep_no=episode.ep_no)
        return episode

    def delete_episode(self, episode_id: int) -> None:
        if not self.episode_repository.delete(episode_id):
            raise NotFoundError("Episode not found")
        log_operation("DELETE_EPISODE", episode_id=episode_id)
