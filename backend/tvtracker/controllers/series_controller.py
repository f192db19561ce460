from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status

from tvtracker.auth.dependencies import require_admin
from tvtracker.domain.dto import (
    MessageResponse,
    Pagination,
    SeasonCreate,
    SeasonResponse,
    SeriesCreate,
    SeriesListResponse,
    SeriesResponse,
    SeriesUpdate
)
from tvtracker.domain.models import Identity, Season, Series, SeriesFilter, SeriesStatus
from tvtracker.service.catalog_service import CatalogService
from tvtracker.service.dependencies import get_catalog_service, get_media_service
from tvtracker.service.media_service import MediaService, MAX_PAGE_SIZE


router = APIRouter(
    prefix="/series",
    tags=["Series"],
    responses={404: {"description": "Not found"}}
)


@router.get("", response_model=SeriesListResponse)
def list_series(
    title: Optional[str] = Query(None, description="Search in title and synopsis"),
    genre: Optional[List[str]] = Query(None),
    series_status: Optional[SeriesStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    media_service: MediaService = Depends(get_media_service)
):
    result = media_service.list_series(SeriesFilter(text=title, genres=genre, status=series_status), page, limit)

    return SeriesListResponse(
        data=[SeriesResponse.model_validate(series) for series in result.items],
        pagination=Pagination(page=result.page, limit=result.limit, total=result.total, pages=result.pages)
    )


@router.get("/{series_id}", response_model=SeriesResponse)
def get_series(
    series_id: int,
    media_service: MediaService = Depends(get_media_service)
):
    return SeriesResponse.model_validate(media_service.get_series(series_id))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SeriesResponse)
def create_series(
    series_data: SeriesCreate,
    admin: Identity = Depends(require_admin),
    media_service: MediaService = Depends(get_media_service)
):
    series = media_service.create_series(Series(**series_data.model_dump()))
    return SeriesResponse.model_validate(series)


@router.patch("/{series_id}", response_model=SeriesResponse)
def update_series(
    series_id: int,
    changes: SeriesUpdate,
    admin: Identity = Depends(require_admin),
    media_service: MediaService = Depends(get_media_service)
):
    series = media_service.update_series(series_id, changes.model_dump(exclude_unset=True))
    return SeriesResponse.model_validate(series)


@router.delete("/{series_id}", response_model=MessageResponse)
def delete_series(
    series_id: int,
    admin: Identity = Depends(require_admin),
    media_service: MediaService = Depends(get_media_service)
):
    media_service.delete_series(series_id)
    return MessageResponse(message="Series deleted")


@router.get("/{series_id}/seasons", response_model=List[SeasonResponse])
def list_seasons(
    series_id: int,
    catalog_service: CatalogService = Depends(get_catalog_service)
):
    return [SeasonResponse.model_validate(season) for season in catalog_service.list_seasons(series_id)]


@router.post("/{series_id}/seasons", status_code=status.HTTP_201_CREATED, response_model=SeasonResponse)
def create_season(
    series_id: int,
    season_data: SeasonCreate,
    admin: Identity = Depends(require_admin),
    catalog_service: CatalogService = Depends(get_catalog_service)
):
    season = catalog_service.create_season(Season(series_id=series_id, **season_data.model_dump()))
    return SeasonResponse.model_validate(season)
