from sqlalchemy import or_
from sqlalchemy.orm import Session
from typing import Optional

from tvtracker.db.models import SeriesORM
from tvtracker.domain.models import Page, Series, SeriesFilter, SeriesStatus
from tvtracker.repositories.interface.series_repository import SeriesRepository
from tvtracker.repositories.implementation.pagination import paginate
from tvtracker.repositories.implementation.sql_alchemy_movie_repo import (
    decode_genres,
    encode_genres,
    genre_clause
)
from tvtracker.exceptions.repository import (
    EntityNotFoundException,
    RepositoryOperationException,
    InvalidEntityDataException
)


class SQLAlchemySeriesRepo(SeriesRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_domain(self, series_orm: SeriesORM) -> Series:
        try:
            return Series(
                id=series_orm.id,
                title=series_orm.title,
                genres=decode_genres(series_orm.genres),
                status=SeriesStatus(series_orm.status),
                synopsis=series_orm.synopsis,
                release_date=series_orm.release_date,
                created_at=series_orm.created_at,
                updated_at=series_orm.updated_at
            )
        except Exception as e:
            raise InvalidEntityDataException(f"Failed to convert series data: {str(e)}")

    def _to_orm(self, series: Series) -> SeriesORM:
        return SeriesORM(
            id=series.id,
            title=series.title,
            genres=encode_genres(series.genres),
            status=series.status.value,
            synopsis=series.synopsis,
            release_date=series.release_date
        )

    def get_by_id(self, series_id: int) -> Optional[Series]:
        try:
            series_orm = self.session.get(SeriesORM, series_id)
            return self._to_domain(series_orm) if series_orm else None
        except InvalidEntityDataException:
            raise
        except Exception as e:
            raise RepositoryOperationException(f"Failed to get series by ID: {str(e)}")

    def exists(self, series_id: int) -> bool:
        try:
            return self.session.query(SeriesORM.id).filter(SeriesORM.id == series_id).first() is not None
        except Exception as e:
            raise RepositoryOperationException(f"Failed to check series existence: {str(e)}")

    def list(self, series_filter: SeriesFilter, page: int, limit: int) -> Page[Series]:
        try:
            query = self.session.query(SeriesORM)

            if series_filter.text:
                pattern = f"%{series_filter.text}%"
                query = query.filter(or_(SeriesORM.title.ilike(pattern), SeriesORM.synopsis.ilike(pattern)))
            if series_filter.genres:
                query = query.filter(genre_clause(SeriesORM.genres, series_filter.genres))
            if series_filter.status is not None:
                query = query.filter(SeriesORM.status == series_filter.status.value)

            query = query.order_by(SeriesORM.created_at.desc(), SeriesORM.id.desc())
            rows, total = paginate(query, page, limit)
            return Page([self._to_domain(row) for row in rows], total, page, limit)
        except InvalidEntityDataException:
            raise
        except Exception as e:
            raise RepositoryOperationException(f"Failed to list series: {str(e)}")

    def create(self, series: Series) -> Series:
        try:
            series_orm = self._to_orm(series)
            self.session.add(series_orm)
            self.session.commit()
            self.session.refresh(series_orm)
            return self._to_domain(series_orm)
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to create series: {str(e)}")

    def update(self, series: Series) -> Series:
        try:
            series_orm = self.session.get(SeriesORM, series.id)
            if not series_orm:
                raise EntityNotFoundException(f"Series {series.id} not found")

            series_orm.title = series.title
            series_orm.genres = encode_genres(series.genres)
            series_orm.status = series.status.value
            series_orm.synopsis = series.synopsis
            series_orm.release_date = series.release_date

            self.session.commit()
            self.session.refresh(series_orm)
            return self._to_domain(series_orm)
        except EntityNotFoundException:
            raise
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to update series: {str(e)}")

    def delete(self, series_id: int) -> bool:
        try:
            series_orm = self.session.get(SeriesORM, series_id)
            if not series_orm:
                return False

            self.session.delete(series_orm)
            self.session.commit()
            return True
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to delete series: {str(e)}")
