from datetime import date, datetime
from enum import Enum
from typing import Dict, Generic, List, Optional, TypeVar, Union

T = TypeVar("T")

GENRES = (
    'Action', 'Adventure', 'Animation', 'Biography', 'Comedy', 'Crime', 'Documentary',
    'Drama', 'Family', 'Fantasy', 'Film-Noir', 'History', 'Horror', 'Music',
    'Musical', 'Mystery', 'Romance', 'Sci-Fi', 'Sport', 'Thriller', 'War', 'Western'
)


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"


class TargetType(str, Enum):
    MOVIE = "movie"
    SERIES = "series"


class SeriesStatus(str, Enum):
    PENDING = "pending"
    ONGOING = "ongoing"
    FINISHED = "finished"


class User:
    def __init__(
        self,
        username: str,
        email: str,
        hashed_password: str,
        id: Optional[int] = None,
        role: Role = Role.USER,
        created_at: datetime = None,
        updated_at: datetime = None
    ):
        self.username = username
        self.email = email
        self.hashed_password = hashed_password
        self.id = id
        self.role = role
        self.created_at = created_at
        self.updated_at = updated_at

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class Identity:
    """The authenticated caller of a request."""

    def __init__(self, subject_id: int, email: str, role: Role):
        self.subject_id = subject_id
        self.email = email
        self.role = role

    def __eq__(self, other):
        if not isinstance(other, Identity):
            return NotImplemented
        return (self.subject_id, self.email, self.role) == (other.subject_id, other.email, other.role)

    def __repr__(self):
        return f"Identity(subject_id={self.subject_id!r}, email={self.email!r}, role={self.role.value!r})"


class Movie:
    type = TargetType.MOVIE

    def __init__(
        self,
        title: str,
        genres: List[str],
        duration_min: int,
        id: Optional[int] = None,
        synopsis: Optional[str] = None,
        release_date: Optional[date] = None,
        created_at: datetime = None,
        updated_at: datetime = None
    ):
        self.title = title
        self.genres = genres
        self.duration_min = duration_min
        self.id = id
        self.synopsis = synopsis
        self.release_date = release_date
        self.created_at = created_at
        self.updated_at = updated_at


class Series:
    type = TargetType.SERIES

    def __init__(
        self,
        title: str,
        genres: List[str],
        status: SeriesStatus = SeriesStatus.PENDING,
        id: Optional[int] = None,
        synopsis: Optional[str] = None,
        release_date: Optional[date] = None,
        created_at: datetime = None,
        updated_at: datetime = None
    ):
        self.title = title
        self.genres = genres
        self.status = status
        self.id = id
        self.synopsis = synopsis
        self.release_date = release_date
        self.created_at = created_at
        self.updated_at = updated_at


# a rating target, discriminated by its ``type`` tag
Media = Union[Movie, Series]


class Season:
    def __init__(
        self,
        series_id: int,
        season_no: int,
        id: Optional[int] = None,
        title: Optional[str] = None,
        synopsis: Optional[str] = None,
        release_date: Optional[date] = None,
        episode_count: int = 0,
        created_at: datetime = None,
        updated_at: datetime = None
    ):
        self.series_id = series_id
        self.season_no = season_no
        self.id = id
        self.title = title
        self.synopsis = synopsis
        self.release_date = release_date
        self.episode_count = episode_count
        self.created_at = created_at
        self.updated_at = updated_at


class Episode:
    def __init__(
        self,
        series_id: int,
        season_id: int,
        ep_no: int,
        title: str,
        duration_min: int,
        id: Optional[int] = None,
        synopsis: Optional[str] = None,
        release_date: Optional[date] = None,
        created_at: datetime = None,
        updated_at: datetime = None
    ):
        self.series_id = series_id
        self.season_id = season_id
        self.ep_no = ep_no
        self.title = title
        self.duration_min = duration_min
        self.id = id
        self.synopsis = synopsis
        self.release_date = release_date
        self.created_at = created_at
        self.updated_at = updated_at


class Rating:
    def __init__(
        self,
        author_id: int,
        target_type: TargetType,
        target_id: int,
        score: int,
        review: Optional[str] = None,
        id: Optional[int] = None,
        created_at: datetime = None,
        updated_at: datetime = None
    ):
        self.author_id = author_id
        self.target_type = target_type
        self.target_id = target_id
        self.score = score
        self.review = review
        self.id = id
        self.created_at = created_at
        self.updated_at = updated_at


class RatingSummary:
    def __init__(self, mean_score: float, total_count: int, distribution: Dict[int, int]):
        self.mean_score = mean_score
        self.total_count = total_count
        self.distribution = distribution


class Page(Generic[T]):
    def __init__(self, items: List[T], total: int, page: int, limit: int):
        self.items = items
        self.total = total
        self.page = page
        self.limit = limit

    @property
    def pages(self) -> int:
        return -(-self.total // self.limit) if self.limit else 0


class MovieFilter:
    def __init__(
        self,
        text: Optional[str] = None,
        genres: Optional[List[str]] = None,
        min_year: Optional[int] = None,
        max_year: Optional[int] = None,
        min_duration: Optional[int] = None,
        max_duration: Optional[int] = None
    ):
        self.text = text
        self.genres = genres or []
        self.min_year = min_year
        self.max_year = max_year
        self.min_duration = min_duration
        self.max_duration = max_duration


class SeriesFilter:
    def __init__(
        self,
        text: Optional[str] = None,
        genres: Optional[List[str]] = None,
        status: Optional[SeriesStatus] = None
    ):
        self.text = text
        self.genres = genres or []
        self.status = status


class EpisodeFilter:
    def __init__(self, series_id: Optional[int] = None, season_id: Optional[int] = None):
        self.series_id = series_id
        self.season_id = season_id
