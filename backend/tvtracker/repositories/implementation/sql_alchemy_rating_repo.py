from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import Dict, Optional
from sqlalchemy.exc import IntegrityError

from tvtracker.db.models import RatingORM
from tvtracker.domain.models import Page, Rating, TargetType
from tvtracker.repositories.interface.rating_repository import RatingRepository
from tvtracker.repositories.implementation.pagination import paginate
from tvtracker.exceptions.repository import (
    EntityNotFoundException,
    DuplicateEntityException,
    RepositoryOperationException,
    InvalidEntityDataException
)


class SQLAlchemyRatingRepo(RatingRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_domain(self, rating_orm: RatingORM) -> Rating:
        try:
            return Rating(
                id=rating_orm.id,
                author_id=rating_orm.author_id,
                target_type=TargetType(rating_orm.target_type),
                target_id=rating_orm.target_id,
                score=rating_orm.score,
                review=rating_orm.review,
                created_at=rating_orm.created_at,
                updated_at=rating_orm.updated_at
            )
        except Exception as e:
            raise InvalidEntityDataException(f"Failed to convert rating data: {str(e)}")

    def _to_orm(self, rating: Rating) -> RatingORM:
        return RatingORM(
            author_id=rating.author_id,
            target_type=rating.target_type.value,
            target_id=rating.target_id,
            score=rating.score,
            review=rating.review
        )

    def get_by_id(self, rating_id: int) -> Optional[Rating]:
        try:
            rating_orm = self.session.get(RatingORM, rating_id)
            return self._to_domain(rating_orm) if rating_orm else None
        except InvalidEntityDataException:
            raise
        except Exception as e:
            raise RepositoryOperationException(f"Failed to get rating by ID: {str(e)}")

    def get_by_author_and_target(self, author_id: int, target_type: TargetType, target_id: int) -> Optional[Rating]:
        try:
            rating_orm = self.session.query(RatingORM).filter(
                RatingORM.author_id == author_id,
                RatingORM.target_type == target_type.value,
                RatingORM.target_id == target_id
            ).first()
            return self._to_domain(rating_orm) if rating_orm else None
        except InvalidEntityDataException:
            raise
        except Exception as e:
            raise RepositoryOperationException(f"Failed to get rating by author and target: {str(e)}")

    def list_by_author(self, author_id: int, page: int, limit: int) -> Page[Rating]:
        try:
            query = self.session.query(RatingORM).filter(
                RatingORM.author_id == author_id
            ).order_by(RatingORM.created_at.desc(), RatingORM.id.desc())
            rows, total = paginate(query, page, limit)
            return Page([self._to_domain(r) for r in rows], total, page, limit)
        except InvalidEntityDataException:
            raise
        except Exception as e:
            raise RepositoryOperationException(f"Failed to list ratings by author: {str(e)}")

    def add_rating(self, rating: Rating) -> Rating:
        # the unique constraint decides between concurrent duplicates, not a prior read
        try:
            new_rating = self._to_orm(rating)
            self.session.add(new_rating)
            self.session.commit()
            self.session.refresh(new_rating)
            return self._to_domain(new_rating)
        except IntegrityError:
            self.session.rollback()
            raise DuplicateEntityException(
                f"Rating by user {rating.author_id} for {rating.target_type.value} {rating.target_id} already exists"
            )
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to add rating: {str(e)}")

    def update_rating(self, rating: Rating) -> Rating:
        try:
            rating_orm = self.session.get(RatingORM, rating.id)
            if not rating_orm:
                raise EntityNotFoundException(f"Rating {rating.id} not found")

            rating_orm.score = rating.score
            rating_orm.review = rating.review
            self.session.commit()
            self.session.refresh(rating_orm)
            return self._to_domain(rating_orm)
        except EntityNotFoundException:
            raise
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to update rating: {str(e)}")

    def delete(self, rating_id: int) -> bool:
        try:
            rating_orm = self.session.get(RatingORM, rating_id)
            if rating_orm:
                self.session.delete(rating_orm)
                self.session.commit()
                return True
            return False
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to delete rating: {str(e)}")

    def get_score_distribution(self, target_type: TargetType, target_id: int) -> Dict[int, int]:
        try:
            rows = self.session.query(
                RatingORM.score, func.count(RatingORM.id)
            ).filter(
                RatingORM.target_type == target_type.value,
                RatingORM.target_id == target_id
            ).group_by(RatingORM.score).all()
            return {score: count for score, count in rows}
        except Exception as e:
            raise RepositoryOperationException(f"Failed to aggregate ratings: {str(e)}")
