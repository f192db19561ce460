from datetime import date, datetime
from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel
from typing import Annotated, Dict, List, Optional

from tvtracker.auth.password import MAX_PASSWORD_BYTES, password_too_long
from tvtracker.domain.models import GENRES, Role, SeriesStatus, TargetType


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


def _check_genres(genres: List[str]) -> List[str]:
    if len(genres) == 0:
        raise ValueError('At least one genre is required')
    unknown = [genre for genre in genres if genre not in GENRES]
    if unknown:
        raise ValueError(f"Unknown genres: {', '.join(unknown)}")
    return genres


def _check_password_length(password: str) -> str:
    if password_too_long(password):
        raise ValueError(f"Password cannot exceed {MAX_PASSWORD_BYTES} bytes")
    return password


def _check_not_future(value: date) -> date:
    if value > date.today():
        raise ValueError('Release date cannot be in the future')
    return value


Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
Synopsis = Annotated[str, StringConstraints(strip_whitespace=True, max_length=2000)]
Review = Annotated[str, StringConstraints(strip_whitespace=True, max_length=1000)]
Genres = Annotated[List[str], AfterValidator(_check_genres)]
ReleaseDate = Annotated[date, AfterValidator(_check_not_future)]
Score = Annotated[int, Field(ge=1, le=10)]
NewPassword = Annotated[str, Field(min_length=6), AfterValidator(_check_password_length)]


# auth

class RegisterRequest(ApiModel):
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=30)
    password: NewPassword

    @field_validator('username')
    @classmethod
    def strip_username(cls, v):
        v = v.strip()
        if len(v) < 3:
            raise ValueError('Username must be between 3 and 30 characters')
        return v


class LoginRequest(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdate(ApiModel):
    username: Optional[str] = Field(None, min_length=3, max_length=30)
    email: Optional[EmailStr] = None


class PasswordChange(ApiModel):
    current_password: str = Field(..., min_length=1)
    new_password: NewPassword


class UserResponse(ApiModel):
    id: int
    email: str
    username: str
    role: Role
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AuthResponse(ApiModel):
    user: UserResponse
    token: str
    token_type: str = "bearer"


class MessageResponse(ApiModel):
    message: str


class Pagination(ApiModel):
    page: int
    limit: int
    total: int
    pages: int


# movies and series

class MovieCreate(ApiModel):
    title: Title
    genres: Genres
    synopsis: Optional[Synopsis] = None
    release_date: Optional[ReleaseDate] = None
    duration_min: int = Field(..., ge=1, le=600)


class MovieUpdate(ApiModel):
    title: Optional[Title] = None
    genres: Optional[Genres] = None
    synopsis: Optional[Synopsis] = None
    release_date: Optional[ReleaseDate] = None
    duration_min: Optional[int] = Field(None, ge=1, le=600)


class MovieResponse(ApiModel):
    id: int
    type: TargetType = TargetType.MOVIE
    title: str
    genres: List[str]
    synopsis: Optional[str] = None
    release_date: Optional[date] = None
    duration_min: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MovieListResponse(ApiModel):
    data: List[MovieResponse]
    pagination: Pagination


class SeriesCreate(ApiModel):
    title: Title
    genres: Genres
    status: SeriesStatus = SeriesStatus.PENDING
    synopsis: Optional[Synopsis] = None
    release_date: Optional[ReleaseDate] = None


class SeriesUpdate(ApiModel):
    title: Optional[Title] = None
    genres: Optional[Genres] = None
    status: Optional[SeriesStatus] = None
    synopsis: Optional[Synopsis] = None
    release_date: Optional[ReleaseDate] = None


class SeriesResponse(ApiModel):
    id: int
    type: TargetType = TargetType.SERIES
    title: str
    genres: List[str]
    status: SeriesStatus
    synopsis: Optional[str] = None
    release_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SeriesListResponse(ApiModel):
    data: List[SeriesResponse]
    pagination: Pagination


# seasons and episodes

class SeasonCreate(ApiModel):
    season_no: int = Field(..., ge=1)
    title: Optional[Annotated[str, StringConstraints(strip_whitespace=True, max_length=200)]] = None
    synopsis: Optional[Synopsis] = None
    release_date: Optional[ReleaseDate] = None


class SeasonResponse(ApiModel):
    id: int
    series_id: int
    season_no: int
    title: Optional[str] = None
    synopsis: Optional[str] = None
    release_date: Optional[date] = None
    episode_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EpisodeCreate(ApiModel):
    season_id: int
    ep_no: int = Field(..., ge=1)
    title: Title
    synopsis: Optional[Synopsis] = None
    duration_min: int = Field(..., ge=1, le=180)
    release_date: Optional[ReleaseDate] = None


class EpisodeResponse(ApiModel):
    id: int
    series_id: int
    season_id: int
    ep_no: int
    title: str
    synopsis: Optional[str] = None
    duration_min: int
    release_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EpisodeListResponse(ApiModel):
    data: List[EpisodeResponse]
    pagination: Pagination


# ratings

class RatingCreate(ApiModel):
    target: TargetType
    target_id: int
    score: Score
    review: Optional[Review] = None


class RatingUpdate(ApiModel):
    score: Optional[Score] = None
    review: Optional[Review] = None


class RatingResponse(ApiModel):
    id: int
    author_id: int
    target: TargetType = Field(validation_alias='target_type')
    target_id: int
    score: int
    review: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RatingListResponse(ApiModel):
    data: List[RatingResponse]
    pagination: Pagination


class RatingAverageResponse(ApiModel):
    target: TargetType
    target_id: int
    mean_score: float
    total_count: int
    distribution: Dict[int, int]
    user_score: Optional[int] = None
