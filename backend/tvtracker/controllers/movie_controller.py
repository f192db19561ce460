from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status

from tvtracker.auth.dependencies import require_admin
from tvtracker.domain.dto import (
    MessageResponse,
    MovieCreate,
    MovieListResponse,
    MovieResponse,
    MovieUpdate,
    Pagination
)
from tvtracker.domain.models import Identity, Movie, MovieFilter
from tvtracker.service.dependencies import get_media_service
from tvtracker.service.media_service import MediaService, MAX_PAGE_SIZE


router = APIRouter(
    prefix="/movies",
    tags=["Movies"],
    responses={404: {"description": "Not found"}}
)


@router.get("", response_model=MovieListResponse)
def list_movies(
    title: Optional[str] = Query(None, description="Search in title and synopsis"),
    genre: Optional[List[str]] = Query(None),
    min_year: Optional[int] = Query(None, alias="minYear"),
    max_year: Optional[int] = Query(None, alias="maxYear"),
    min_duration: Optional[int] = Query(None, alias="minDuration"),
    max_duration: Optional[int] = Query(None, alias="maxDuration"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    media_service: MediaService = Depends(get_media_service)
):
    movie_filter = MovieFilter(
        text=title,
        genres=genre,
        min_year=min_year,
        max_year=max_year,
        min_duration=min_duration,
        max_duration=max_duration
    )
    result = media_service.list_movies(movie_filter, page, limit)

    return MovieListResponse(
        data=[MovieResponse.model_validate(movie) for movie in result.items],
        pagination=Pagination(page=result.page, limit=result.limit, total=result.total, pages=result.pages)
    )


@router.get("/{movie_id}", response_model=MovieResponse)
def get_movie(
    movie_id: int,
    media_service: MediaService = Depends(get_media_service)
):
    return MovieResponse.model_validate(media_service.get_movie(movie_id))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=MovieResponse)
def create_movie(
    movie_data: MovieCreate,
    admin: Identity = Depends(require_admin),
    media_service: MediaService = Depends(get_media_service)
):
    movie = media_service.create_movie(Movie(**movie_data.model_dump()))
    return MovieResponse.model_validate(movie)


@router.patch("/{movie_id}", response_model=MovieResponse)
def update_movie(
    movie_id: int,
    changes: MovieUpdate,
    admin: Identity = Depends(require_admin),
    media_service: MediaService = Depends(get_media_service)
):
    movie = media_service.update_movie(movie_id, changes.model_dump(exclude_unset=True))
    return MovieResponse.model_validate(movie)


@router.delete("/{movie_id}", response_model=MessageResponse)
def delete_movie(
    movie_id: int,
    admin: Identity = Depends(require_admin),
    media_service: MediaService = Depends(get_media_service)
):
    media_service.delete_movie(movie_id)
    return MessageResponse(message="Movie deleted")
