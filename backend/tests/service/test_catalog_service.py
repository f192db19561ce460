import pytest
from unittest.mock import Mock

from tvtracker.domain.models import Episode, EpisodeFilter, Page, Season
from tvtracker.service.catalog_service import CatalogService
from tvtracker.exceptions.api import ConflictError, NotFoundError
from tvtracker.exceptions.repository import DuplicateEntityException, EntityNotFoundException


@pytest.fixture
def mock_series_repo():
    repo = Mock()
    repo.exists.return_value = True
    return repo


@pytest.fixture
def mock_season_repo():
    return Mock()


@pytest.fixture
def mock_episode_repo():
    return Mock()


@pytest.fixture
def catalog_service(mock_series_repo, mock_season_repo, mock_episode_repo):
    return CatalogService(mock_series_repo, mock_season_repo, mock_episode_repo)


def _episode():
    return Episode(series_id=1, season_id=3, ep_no=1, title="Secrets", duration_min=52)


def test_list_seasons(catalog_service, mock_season_repo):
    seasons = [Season(id=3, series_id=1, season_no=1)]
    mock_season_repo.list_for_series.return_value = seasons

    assert catalog_service.list_seasons(1) == seasons


def test_list_seasons_missing_series(catalog_service, mock_series_repo, mock_season_repo):
    mock_series_repo.exists.return_value = False

    with pytest.raises(NotFoundError, match="Series not found"):
        catalog_service.list_seasons(404)
    mock_season_repo.list_for_series.assert_not_called()


def test_create_season_duplicate_number(catalog_service, mock_season_repo):
    mock_season_repo.create.side_effect = DuplicateEntityException("Season 1 already exists")

    with pytest.raises(ConflictError):
        catalog_service.create_season(Season(series_id=1, season_no=1))


def test_delete_season_missing(catalog_service, mock_season_repo):
    mock_season_repo.delete.return_value = False

    with pytest.raises(NotFoundError, match="Season not found"):
        catalog_service.delete_season(3)


def test_list_episodes(catalog_service, mock_episode_repo):
    episode_filter = EpisodeFilter(season_id=3)
    mock_episode_repo.list.return_value = Page([_episode()], total=1, page=1, limit=10)

    page = catalog_service.list_episodes(episode_filter)

    assert page.total == 1
    mock_episode_repo.list.assert_called_once_with(episode_filter, 1, 10)


def test_get_episode_missing(catalog_service, mock_episode_repo):
    mock_episode_repo.get_by_id.return_value = None

    with pytest.raises(NotFoundError, match="Episode not found"):
        catalog_service.get_episode(404)


def test_create_episode_missing_season(catalog_service, mock_episode_repo):
    mock_episode_repo.create.side_effect = EntityNotFoundException("Season with id 3 not found")

    with pytest.raises(NotFoundError, match="Season not found"):
        catalog_service.create_episode(_episode())


def test_create_episode_duplicate_number(catalog_service, mock_episode_repo):
    mock_episode_repo.create.side_effect = DuplicateEntityException("Episode 1 already exists")

    with pytest.raises(ConflictError):
        catalog_service.create_episode(_episode())


def test_delete_episode(catalog_service, mock_episode_repo):
    mock_episode_repo.delete.return_value = True

    catalog_service.delete_episode(7)

    mock_episode_repo.delete.assert_called_once_with(7)
