from tvtracker.repositories.interface.user_repository import UserRepository
from tvtracker.repositories.interface.movie_repository import MovieRepository
from tvtracker.repositories.interface.series_repository import SeriesRepository
from tvtracker.repositories.interface.season_repository import SeasonRepository, EpisodeRepository
from tvtracker.repositories.interface.rating_repository import RatingRepository
from tvtracker.repositories.implementation.sql_alchemy_user_repo import SQLAlchemyUserRepo
from tvtracker.repositories.implementation.sql_alchemy_movie_repo import SQLAlchemyMovieRepo
from tvtracker.repositories.implementation.sql_alchemy_series_repo import SQLAlchemySeriesRepo
from tvtracker.repositories.implementation.sql_alchemy_season_repo import SQLAlchemySeasonRepo, SQLAlchemyEpisodeRepo
from tvtracker.repositories.implementation.sql_alchemy_rating_repo import SQLAlchemyRatingRepo

__all__ = [
    "UserRepository",
    "MovieRepository",
    "SeriesRepository",
    "SeasonRepository",
    "EpisodeRepository",
    "RatingRepository",
    "SQLAlchemyUserRepo",
    "SQLAlchemyMovieRepo",
    "SQLAlchemySeriesRepo",
    "SQLAlchemySeasonRepo",
    "SQLAlchemyEpisodeRepo",
    "SQLAlchemyRatingRepo",
]
