from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from tvtracker.auth.dependencies import get_current_identity, get_optional_identity
from tvtracker.domain.dto import (
    MessageResponse,
    Pagination,
    RatingAverageResponse,
    RatingCreate,
    RatingListResponse,
    RatingResponse,
    RatingUpdate
)
from tvtracker.domain.models import Identity, TargetType
from tvtracker.service.dependencies import get_rating_service
from tvtracker.service.media_service import MAX_PAGE_SIZE
from tvtracker.service.rating_service import RatingService

router = APIRouter(
    prefix="/ratings",
    tags=["Ratings"],
    responses={404: {"description": "Not found"}}
)

@router.post("", status_code=status.HTTP_201_CREATED, response_model=RatingResponse)
def create_rating(
    rating_data: RatingCreate,
    identity: Identity = Depends(get_current_identity),
    rating_service: RatingService = Depends(get_rating_service)
):
    rating = rating_service.submit(
        identity.subject_id,
        rating_data.target,
        rating_data.target_id,
        rating_data.score,
        rating_data.review
    )
    return RatingResponse.model_validate(rating)

@router.get("/my", response_model=RatingListResponse)
def list_my_ratings(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    identity: Identity = Depends(get_current_identity),
    rating_service: RatingService = Depends(get_rating_service)
):
    result = rating_service.list_for_author(identity.subject_id, page, limit)
    return RatingListResponse(
        data=[RatingResponse.model_validate(rating) for rating in result.items],
        pagination=Pagination(page=result.page, limit=result.limit, total=result.total, pages=result.pages)
    )

@router.get("/avg/{target}/{target_id}", response_model=RatingAverageResponse)
def get_average_rating(
    target: TargetType,
    target_id: int,
    identity: Optional[Identity] = Depends(get_optional_identity),
    rating_service: RatingService = Depends(get_rating_service)
):
    summary = rating_service.average(target, target_id)
    user_score = rating_service.score_for(identity.subject_id, target, target_id) if identity else None

    return RatingAverageResponse(
        target=target,
        target_id=target_id,
        mean_score=summary.mean_score,
        total_count=summary.total_count,
        distribution=summary.distribution,
        user_score=user_score
    )

@router.patch("/{rating_id}", response_model=RatingResponse)
def update_rating(
    rating_id: int,
    changes: RatingUpdate,
    identity: Identity = Depends(get_current_identity),
    rating_service: RatingService = Depends(get_rating_service)
):
    rating = rating_service.update(rating_id, identity, changes.model_dump(exclude_unset=True))
    return RatingResponse.model_validate(rating)

@router.delete("/{rating_id}", response_model=MessageResponse)
def delete_rating(
    rating_id: int,
    identity: Identity = Depends(get_current_identity),
    rating_service: RatingService = Depends(get_rating_service)
):
    rating_service.delete(rating_id, identity)
    return MessageResponse(message="Rating deleted")
