from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from tvtracker.auth.dependencies import require_admin
from tvtracker.domain.dto import EpisodeCreate, EpisodeListResponse, EpisodeResponse, MessageResponse, Pagination
from tvtracker.domain.models import Episode, EpisodeFilter, Identity
from tvtracker.service.catalog_service import CatalogService
from tvtracker.service.dependencies import get_catalog_service
from tvtracker.service.media_service import MAX_PAGE_SIZE

router = APIRouter(tags=["Episodes"], responses={404: {"description": "Not found"}})


@router.delete("/seasons/{season_id}", response_model=MessageResponse)
def delete_season(
    season_id: int,
    admin: Identity = Depends(require_admin),
    catalog_service: CatalogService = Depends(get_catalog_service)
):
    catalog_service.delete_season(season_id)
    return MessageResponse(message="Season deleted")


@router.get("/episodes", response_model=EpisodeListResponse)
def list_episodes(
    series_id: Optional[int] = Query(None, alias="seriesId"),
    season_id: Optional[int] = Query(None, alias="seasonId"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    catalog_service: CatalogService = Depends(get_catalog_service)
):
    result = catalog_service.list_episodes(EpisodeFilter(series_id=series_id, season_id=season_id), page, limit)
    return EpisodeListResponse(
        data=[EpisodeResponse.model_validate(episode) for episode in result.items],
        pagination=Pagination(page=result.page, limit=result.limit, total=result.total, pages=result.pages)
    )


@router.get("/episodes/{episode_id}", response_model=EpisodeResponse)
def get_episode(
    episode_id: int,
    catalog_service: CatalogService = Depends(get_catalog_service)
):
    return EpisodeResponse.model_validate(catalog_service.get_episode(episode_id))


@router.post("/episodes", status_code=status.HTTP_201_CREATED, response_model=EpisodeResponse)
def create_episode(
    episode_data: EpisodeCreate,
    admin: Identity = Depends(require_admin),
    catalog_service: CatalogService = Depends(get_catalog_service)
):
    # series_id is taken from the season when the row is written
    episode = catalog_service.create_episode(Episode(series_id=None, **episode_data.model_dump()))
    return EpisodeResponse.model_validate(episode)


@router.delete("/episodes/{episode_id}", response_model=MessageResponse)
def delete_episode(
    episode_id: int,
    admin: Identity = Depends(require_admin),
    catalog_service: CatalogService = Depends(get_catalog_service)
):
    catalog_service.delete_episode(episode_id)
    return MessageResponse(message="Episode deleted")
