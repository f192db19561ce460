from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional

from tvtracker.db.models import EpisodeORM, SeasonORM
from tvtracker.domain.models import Episode, EpisodeFilter, Page, Season
from tvtracker.repositories.interface.season_repository import EpisodeRepository, SeasonRepository
from tvtracker.repositories.implementation.pagination import paginate
from tvtracker.exceptions.repository import (
    DuplicateEntityException,
    EntityNotFoundException,
    RepositoryOperationException
)


class SQLAlchemySeasonRepo(SeasonRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_domain(self, season_orm: SeasonORM) -> Season:
        return Season(
            id=season_orm.id,
            series_id=season_orm.series_id,
            season_no=season_orm.season_no,
            title=season_orm.title,
            synopsis=season_orm.synopsis,
            release_date=season_orm.release_date,
            episode_count=season_orm.episode_count,
            created_at=season_orm.created_at,
            updated_at=season_orm.updated_at
        )

    def get_by_id(self, season_id: int) -> Optional[Season]:
        try:
            season_orm = self.session.get(SeasonORM, season_id)
            return self._to_domain(season_orm) if season_orm else None
        except Exception as e:
            raise RepositoryOperationException(f"Failed to get season by ID: {str(e)}")

    def list_for_series(self, series_id: int) -> List[Season]:
        try:
            seasons_orm = self.session.query(SeasonORM).filter(
                SeasonORM.series_id == series_id
            ).order_by(SeasonORM.season_no).all()
            return [self._to_domain(s) for s in seasons_orm]
        except Exception as e:
            raise RepositoryOperationException(f"Failed to list seasons: {str(e)}")

    def create(self, season: Season) -> Season:
        try:
            season_orm = SeasonORM(
                series_id=season.series_id,
                season_no=season.season_no,
                title=season.title,
                synopsis=season.synopsis,
                release_date=season.release_date,
                episode_count=0
            )
            self.session.add(season_orm)
            self.session.commit()
            self.session.refresh(season_orm)
            return self._to_domain(season_orm)
        except IntegrityError:
            self.session.rollback()
            raise DuplicateEntityException(f"Season {season.season_no} already exists for series {season.series_id}")
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to create season: {str(e)}")

    def delete(self, season_id: int) -> bool:
        try:
            season_orm = self.session.get(SeasonORM, season_id)
            if not season_orm:
                return False

            self.session.delete(season_orm)
            self.session.commit()
            return True
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to delete season: {str(e)}")


class SQLAlchemyEpisodeRepo(EpisodeRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_domain(self, episode_orm: EpisodeORM) -> Episode:
        return Episode(
            id=episode_orm.id,
            series_id=episode_orm.series_id,
            season_id=episode_orm.season_id,
            ep_no=episode_orm.ep_no,
            title=episode_orm.title,
            synopsis=episode_orm.synopsis,
            duration_min=episode_orm.duration_min,
            release_date=episode_orm.release_date,
            created_at=episode_orm.created_at,
            updated_at=episode_orm.updated_at
        )

    def get_by_id(self, episode_id: int) -> Optional[Episode]:
        try:
            episode_orm = self.session.get(EpisodeORM, episode_id)
            return self._to_domain(episode_orm) if episode_orm else None
        except Exception as e:
            raise RepositoryOperationException(f"Failed to get episode by ID: {str(e)}")

    def list(self, episode_filter: EpisodeFilter, page: int, limit: int) -> Page[Episode]:
        try:
            query = self.session.query(EpisodeORM)
            if episode_filter.series_id is not None:
                query = query.filter(EpisodeORM.series_id == episode_filter.series_id)
            if episode_filter.season_id is not None:
                query = query.filter(EpisodeORM.season_id == episode_filter.season_id)

            query = query.order_by(EpisodeORM.series_id, EpisodeORM.season_id, EpisodeORM.ep_no)
            rows, total = paginate(query, page, limit)
            return Page([self._to_domain(row) for row in rows], total, page, limit)
        except Exception as e:
            raise RepositoryOperationException(f"Failed to list episodes: {str(e)}")

    def create(self, episode: Episode) -> Episode:
        try:
            season_orm = self.session.get(SeasonORM, episode.season_id)
            if not season_orm:
                raise EntityNotFoundException(f"Season {episode.season_id} not found")

            episode_orm = EpisodeORM(
                series_id=season_orm.series_id,
                season_id=season_orm.id,
                ep_no=episode.ep_no,
                title=episode.title,
                synopsis=episode.synopsis,
                duration_min=episode.duration_min,
                release_date=episode.release_date
            )
            self.session.add(episode_orm)
            season_orm.episode_count = SeasonORM.episode_count + 1
            self.session.commit()
            self.session.refresh(episode_orm)
            return self._to_domain(episode_orm)
        except EntityNotFoundException:
            raise
        except IntegrityError:
            self.session.rollback()
            raise DuplicateEntityException(f"Episode {episode.ep_no} already exists in season {episode.season_id}")
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to create episode: {str(e)}")

    def delete(self, episode_id: int) -> bool:
        try:
            episode_orm = self.session.get(EpisodeORM, episode_id)
            if not episode_orm:
                return False

            season_orm = self.session.get(SeasonORM, episode_orm.season_id)
            self.session.delete(episode_orm)
            if season_orm:
                season_orm.episode_count = SeasonORM.episode_count - 1
            self.session.commit()
            return True
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to delete episode: {str(e)}")
