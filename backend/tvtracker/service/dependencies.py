from fastapi import Depends, Request
from sqlalchemy.orm import Session

from tvtracker.db.database import get_db
from tvtracker.repositories import (
    SQLAlchemyUserRepo,
    SQLAlchemyRatingRepo,
    SQLAlchemyMovieRepo,
    SQLAlchemySeriesRepo,
    SQLAlchemySeasonRepo,
    SQLAlchemyEpisodeRepo
)
from tvtracker.service.auth_service import AuthService
from tvtracker.service.catalog_service import CatalogService
from tvtracker.service.media_service import MediaService
from tvtracker.service.rating_service import RatingService

def get_auth_service(request: Request, db: Session = Depends(get_db)) -> AuthService:
    return AuthService(
        SQLAlchemyUserRepo(db),
        password_hasher=request.app.state.password_hasher,
        token_service=request.app.state.token_service
    )

def get_media_service(db: Session = Depends(get_db)) -> MediaService:
    return MediaService(SQLAlchemyMovieRepo(db), SQLAlchemySeriesRepo(db))

def get_rating_service(db: Session = Depends(get_db)) -> RatingService:
    return RatingService(
        rating_repo=SQLAlchemyRatingRepo(db),
        media_service=MediaService(SQLAlchemyMovieRepo(db), SQLAlchemySeriesRepo(db))
    )

def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    return CatalogService(
        series_repository=SQLAlchemySeriesRepo(db),
        season_repository=SQLAlchemySeasonRepo(db),
        episode_repository=SQLAlchemyEpisodeRepo(db)
    )
