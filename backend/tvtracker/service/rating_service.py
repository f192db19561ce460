import math
from typing import Any, Dict, Optional

from tvtracker.auth.guard import authorize_owner_or_role
from tvtracker.config.logging import log_operation
from tvtracker.domain.models import Identity, Page, Rating, RatingSummary, Role, TargetType
from tvtracker.exceptions.auth import InsufficientRoleError
from tvtracker.exceptions.rating import (
    DuplicateRatingError,
    InvalidRatingError,
    NotFoundOrForbiddenError,
    TargetNotFoundError
)
from tvtracker.exceptions.repository import DuplicateEntityException
from tvtracker.repositories import RatingRepository
from tvtracker.service.media_service import MediaService

MIN_SCORE = 1
MAX_SCORE = 10
MAX_REVIEW_LENGTH = 1000

# fields a rating update may touch, everything else in a patch is ignored
MUTABLE_FIELDS = ("score", "review")


def parse_target_type(value: Any) -> TargetType:
    try:
        return TargetType(value)
    except ValueError:
        raise InvalidRatingError('Target type must be "movie" or "series"')


def validate_score(score: Any) -> int:
    if isinstance(score, bool) or not isinstance(score, int):
        raise InvalidRatingError("Score must be an integer")
    if score < MIN_SCORE or score > MAX_SCORE:
        raise InvalidRatingError(f"Score must be between {MIN_SCORE} and {MAX_SCORE}")
    return score


def validate_review(review: Optional[str]) -> Optional[str]:
    if review is None:
        return None
    review = review.strip()
    if len(review) > MAX_REVIEW_LENGTH:
        raise InvalidRatingError(f"Review cannot exceed {MAX_REVIEW_LENGTH} characters")
    return review


def round_one_decimal(value: float) -> float:
    """Round half up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


class RatingService:
    def __init__(self, rating_repo: RatingRepository, media_service: MediaService):
        self.rating_repo = rating_repo
        self.media_service = media_service

    def _ensure_target(self, target_type: TargetType, target_id: int):
        if not self.media_service.exists(target_type, target_id):
            label = "Movie" if target_type == TargetType.MOVIE else "Series"
            raise TargetNotFoundError(f"{label} not found")

    def submit(self, author_id: int, target_type: Any, target_id: int, score: Any,
               review: Optional[str] = None) -> Rating:
        target_type = parse_target_type(target_type)
        score = validate_score(score)
        review = validate_review(review)

        self._ensure_target(target_type, target_id)

        rating = Rating(
            author_id=author_id,
            target_type=target_type,
            target_id=target_id,
            score=score,
            review=review
        )
        try:
            rating = self.rating_repo.add_rating(rating)
        except DuplicateEntityException:
            raise DuplicateRatingError()

        log_operation(
            "CREATE_RATING",
            rating_id=rating.id,
            target=target_type.value,
            target_id=target_id,
            score=score,
            user_id=author_id
        )
        return rating

    def average(self, target_type: Any, target_id: int) -> RatingSummary:
        target_type = parse_target_type(target_type)
        self._ensure_target(target_type, target_id)

        distribution = self.rating_repo.get_score_distribution(target_type, target_id)
        total_count = sum(distribution.values())
        if total_count == 0:
            return RatingSummary(mean_score=0, total_count=0, distribution={})

        mean = sum(score * count for score, count in distribution.items()) / total_count
        summary = RatingSummary(
            mean_score=round_one_decimal(mean),
            total_count=total_count,
            distribution=dict(sorted(distribution.items()))
        )

        log_operation(
            "GET_AVERAGE_RATING",
            target=target_type.value,
            target_id=target_id,
            mean_score=summary.mean_score,
            total_count=total_count
        )
        return summary

    def score_for(self, author_id: int, target_type: TargetType, target_id: int) -> Optional[int]:
        rating = self.rating_repo.get_by_author_and_target(author_id, target_type, target_id)
        return rating.score if rating else None

    def list_for_author(self, author_id: int, page: int = 1, limit: int = 10) -> Page[Rating]:
        return self.rating_repo.list_by_author(author_id, page, limit)

    def _modifiable_rating(self, rating_id: int, requester: Identity) -> Rating:
        rating = self.rating_repo.get_by_id(rating_id)
        if rating is None:
            raise NotFoundOrForbiddenError()

        # a refused ownership check looks exactly like a missing rating
        try:
            authorize_owner_or_role(requester, rating.author_id, [Role.ADMIN])
        except InsufficientRoleError:
            raise NotFoundOrForbiddenError()
        return rating

    def update(self, rating_id: int, requester: Identity, patch: Dict[str, Any]) -> Rating:
        rating = self._modifiable_rating(rating_id, requester)

        changes = {key: value for key, value in patch.items() if key in MUTABLE_FIELDS}
        if changes.get("score") is not None:
            rating.score = validate_score(changes["score"])
        if "review" in changes:
            rating.review = validate_review(changes["review"])

        rating = self.rating_repo.update_rating(rating)

        log_operation(
            "UPDATE_RATING",
            rating_id=rating_id,
            score=rating.score,
            user_id=requester.subject_id
        )
        return rating

    def delete(self, rating_id: int, requester: Identity) -> None:
        self._modifiable_rating(rating_id, requester)
        if not self.rating_repo.delete(rating_id):
            raise NotFoundOrForbiddenError()

        log_operation("DELETE_RATING", rating_id=rating_id, user_id=requester.subject_id)
