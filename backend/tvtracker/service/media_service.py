from datetime import date
from typing import Any, Dict, Optional

from tvtracker.config.logging import log_operation
from tvtracker.domain.models import Media, Movie, MovieFilter, Page, Series, SeriesFilter, TargetType
from tvtracker.exceptions.api import NotFoundError, ValidationError
from tvtracker.repositories import MovieRepository, SeriesRepository

MAX_PAGE_SIZE = 100
MIN_YEAR = 1900
MAX_DURATION = 600

MOVIE_FIELDS = ("title", "genres", "synopsis", "release_date", "duration_min")
SERIES_FIELDS = ("title", "genres", "status", "synopsis", "release_date")


def check_pagination(page: int, limit: int):
    if page < 1:
        raise ValidationError("Page number must be greater than 0")
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise ValidationError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")


def check_movie_filter(movie_filter: MovieFilter):
    if movie_filter.min_year is not None and movie_filter.min_year < MIN_YEAR:
        raise ValidationError(f"Minimum year must be {MIN_YEAR} or later")
    if movie_filter.max_year is not None and movie_filter.max_year > date.today().year:
        raise ValidationError("Maximum year cannot be after the current year")
    if (movie_filter.min_year is not None and movie_filter.max_year is not None
            and movie_filter.min_year > movie_filter.max_year):
        raise ValidationError("Minimum year cannot be greater than maximum year")

    if movie_filter.min_duration is not None and movie_filter.min_duration < 1:
        raise ValidationError("Minimum duration must be greater than 0")
    if movie_filter.max_duration is not None and movie_filter.max_duration > MAX_DURATION:
        raise ValidationError(f"Maximum duration cannot exceed {MAX_DURATION} minutes")
    if (movie_filter.min_duration is not None and movie_filter.max_duration is not None
            and movie_filter.min_duration > movie_filter.max_duration):
        raise ValidationError("Minimum duration cannot be greater than maximum duration")


class MediaService:
    def __init__(self, movie_repository: MovieRepository, series_repository: SeriesRepository):
        self.movie_repository = movie_repository
        self.series_repository = series_repository

    def _repository_for(self, target_type: TargetType):
        repositories = {
            TargetType.MOVIE: self.movie_repository,
            TargetType.SERIES: self.series_repository,
        }
        return repositories[TargetType(target_type)]

    def exists(self, target_type: TargetType, target_id: int) -> bool:
        return self._repository_for(target_type).exists(target_id)

    def find_by_id(self, target_type: TargetType, target_id: int) -> Optional[Media]:
        return self._repository_for(target_type).get_by_id(target_id)

    # movies

    def list_movies(self, movie_filter: MovieFilter, page: int = 1, limit: int = 10) -> Page[Movie]:
        check_pagination(page, limit)
        check_movie_filter(movie_filter)
        return self.movie_repository.list(movie_filter, page, limit)

    def get_movie(self, movie_id: int) -> Movie:
        movie = self.movie_repository.get_by_id(movie_id)
        if movie is None:
            raise NotFoundError("Movie not found")
        return movie

    def create_movie(self, movie: Movie) -> Movie:
        movie = self.movie_repository.create(movie)
        log_operation("CREATE_MOVIE", movie_id=movie.id, title=movie.title)
        return movie

    def update_movie(self, movie_id: int, changes: Dict[str, Any]) -> Movie:
        movie = self.get_movie(movie_id)
        for field in MOVIE_FIELDS:
            if field in changes:
                setattr(movie, field, changes[field])

        if not movie.title or not movie.genres or movie.duration_min is None:
            raise ValidationError("Title, genres and duration cannot be removed")

        movie = self.movie_repository.update(movie)
        log_operation("UPDATE_MOVIE", movie_id=movie_id, fields=",".join(sorted(changes)))
        return movie

    def delete_movie(self, movie_id: int) -> Movie:
        movie = self.get_movie(movie_id)
        if not self.movie_repository.delete(movie_id):
            raise NotFoundError("Movie not found")
        log_operation("DELETE_MOVIE", movie_id=movie_id, title=movie.title)
        return movie

    # series

    def list_series(self, series_filter: SeriesFilter, page: int = 1, limit: int = 10) -> Page[Series]:
        check_pagination(page, limit)
        return self.series_repository.list(series_filter, page, limit)

    def get_series(self, series_id: int) -> Series:
        series = self.series_repository.get_by_id(series_id)
        if series is None:
            raise NotFoundError("Series not found")
        return series

    def create_series(self, series: Series) -> Series:
        series = self.series_repository.create(series)
        log_operation("CREATE_SERIES", series_id=series.id, title=series.title)
        return series

    def update_series(self, series_id: int, changes: Dict[str, Any]) -> Series:
        series = self.get_series(series_id)
        for field in SERIES_FIELDS:
            if field in changes:
                setattr(series, field, changes[field])

        if not series.title or not series.genres or series.status is None:
            raise ValidationError("Title, genres and status cannot be removed")

        series = self.series_repository.update(series)
        log_operation("UPDATE_SERIES", series_id=series_id, fields=",".join(sorted(changes)))
        return series

    def delete_series(self, series_id: int) -> Series:
        series = self.get_series(series_id)
        if not self.series_repository.delete(series_id):
            raise NotFoundError("Series not found")
        log_operation("DELETE_SERIES", series_id=series_id, title=series.title)
        return series
