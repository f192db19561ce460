from datetime import date
from sqlalchemy import or_
from sqlalchemy.orm import Session
from typing import List, Optional
import json

from tvtracker.db.models import MovieORM
from tvtracker.domain.models import Movie, MovieFilter, Page
from tvtracker.repositories.interface.movie_repository import MovieRepository
from tvtracker.repositories.implementation.pagination import paginate
from tvtracker.exceptions.repository import (
    EntityNotFoundException,
    RepositoryOperationException,
    InvalidEntityDataException
)


def encode_genres(genres: List[str]) -> str:
    return json.dumps(genres)


def decode_genres(raw: str) -> List[str]:
    return json.loads(raw) if raw else []


def genre_clause(column, genres: List[str]):
    # genres are stored as a JSON array, so match the quoted name
    return or_(*[column.contains(json.dumps(genre)) for genre in genres])


class SQLAlchemyMovieRepo(MovieRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_domain(self, movie_orm: MovieORM) -> Movie:
        try:
            return Movie(
                id=movie_orm.id,
                title=movie_orm.title,
                genres=decode_genres(movie_orm.genres),
                synopsis=movie_orm.synopsis,
                release_date=movie_orm.release_date,
                duration_min=movie_orm.duration_min,
                created_at=movie_orm.created_at,
                updated_at=movie_orm.updated_at
            )
        except Exception as e:
            raise InvalidEntityDataException(f"Failed to convert movie data: {str(e)}")

    def _to_orm(self, movie: Movie) -> MovieORM:
        return MovieORM(
            id=movie.id,
            title=movie.title,
            genres=encode_genres(movie.genres),
            synopsis=movie.synopsis,
            release_date=movie.release_date,
            duration_min=movie.duration_min
        )

    def get_by_id(self, movie_id: int) -> Optional[Movie]:
        try:
            movie_orm = self.session.get(MovieORM, movie_id)
            if not movie_orm:
                return None
            return self._to_domain(movie_orm)
        except InvalidEntityDataException:
            raise
        except Exception as e:
            raise RepositoryOperationException(f"Failed to get movie by ID: {str(e)}")

    def exists(self, movie_id: int) -> bool:
        try:
            return self.session.query(MovieORM.id).filter(MovieORM.id == movie_id).first() is not None
        except Exception as e:
            raise RepositoryOperationException(f"Failed to check movie existence: {str(e)}")

    def list(self, movie_filter: MovieFilter, page: int, limit: int) -> Page[Movie]:
        try:
            query = self.session.query(MovieORM)

            if movie_filter.text:
                pattern = f"%{movie_filter.text}%"
                query = query.filter(or_(MovieORM.title.ilike(pattern), MovieORM.synopsis.ilike(pattern)))
            if movie_filter.genres:
                query = query.filter(genre_clause(MovieORM.genres, movie_filter.genres))
            if movie_filter.min_year is not None:
                query = query.filter(MovieORM.release_date >= date(movie_filter.min_year, 1, 1))
            if movie_filter.max_year is not None:
                query = query.filter(MovieORM.release_date <= date(movie_filter.max_year, 12, 31))
            if movie_filter.min_duration is not None:
                query = query.filter(MovieORM.duration_min >= movie_filter.min_duration)
            if movie_filter.max_duration is not None:
                query = query.filter(MovieORM.duration_min <= movie_filter.max_duration)

            query = query.order_by(MovieORM.created_at.desc(), MovieORM.id.desc())
            rows, total = paginate(query, page, limit)
            return Page([self._to_domain(row) for row in rows], total, page, limit)
        except InvalidEntityDataException:
            raise
        except Exception as e:
            raise RepositoryOperationException(f"Failed to list movies: {str(e)}")

    def create(self, movie: Movie) -> Movie:
        try:
            movie_orm = self._to_orm(movie)
            self.session.add(movie_orm)
            self.session.commit()
            self.session.refresh(movie_orm)
            return self._to_domain(movie_orm)
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to create movie: {str(e)}")

    def update(self, movie: Movie) -> Movie:
        try:
            movie_orm = self.session.get(MovieORM, movie.id)
            if not movie_orm:
                raise EntityNotFoundException(f"Movie {movie.id} not found")

            movie_orm.title = movie.title
            movie_orm.genres = encode_genres(movie.genres)
            movie_orm.synopsis = movie.synopsis
            movie_orm.release_date = movie.release_date
            movie_orm.duration_min = movie.duration_min

            self.session.commit()
            self.session.refresh(movie_orm)
            return self._to_domain(movie_orm)
        except EntityNotFoundException:
            raise
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to update movie: {str(e)}")

    def delete(self, movie_id: int) -> bool:
        try:
            movie_orm = self.session.get(MovieORM, movie_id)
            if not movie_orm:
                return False

            self.session.delete(movie_orm)
            self.session.commit()
            return True
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to delete movie: {str(e)}")
