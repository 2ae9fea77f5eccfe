"""
Business logic for restroom reviews.

Users post a 0-5 star review for a restroom, edit or delete their own
reviews, and read a restroom's reviews newest first or ordered by
rating.  Every create, update and delete recomputes the restroom's
``average_rating`` inside the same transaction as the write, so the
stored average always equals the mean of the restroom's active reviews.
"""

import html
import logging
import sqlite3
from typing import List

from ..core.db import transaction
from ..core.exceptions import AuthError, RestroomNotFoundError, ReviewNotFoundError, UserNotFoundError
from ..models.review import Review
from ..repositories.restroom_repository import RestroomRepository
from ..repositories.review_repository import ReviewRepository
from ..repositories.user_repository import UserRepository
from ..schemas.review import ReviewCreate, ReviewRead, ReviewUpdate

logger = logging.getLogger(__name__)


def mean_rating(reviews: List[Review]) -> float:
    """Arithmetic mean of the ratings, 0.0 for an empty list."""
    if not reviews:
        return 0.0
    return sum(review.rating for review in reviews) / len(reviews)


def order_latest(reviews: List[Review]) -> List[Review]:
    """Newest first, given reviews in insertion order."""
    return list(reversed(reviews))


def order_by_low_rating(reviews: List[Review]) -> List[Review]:
    """Ascending rating; equal ratings keep insertion order."""
    return sorted(reviews, key=lambda review: (review.rating, review.id))


def order_by_high_rating(reviews: List[Review]) -> List[Review]:
    """Descending rating, the exact reverse of ``order_by_low_rating``."""
    return list(reversed(order_by_low_rating(reviews)))


def to_review_read(review: Review) -> ReviewRead:
    return ReviewRead(
        review_id=review.id,
        user_id=review.user_id,
        nickname=review.nickname,
        restroom_id=review.restroom_id,
        review_content=html.escape(review.review_content),
        rating=review.rating,
        created_at=review.created_at,
        updated_at=review.updated_at,
    )


class ReviewService:
    """Service for restroom reviews and their rating aggregate."""

    @classmethod
    async def get_review(cls, review_id: int) -> ReviewRead:
        with transaction() as conn:
            review = ReviewRepository(conn).find_by_id(review_id)
        if review is None:
            raise ReviewNotFoundError(f"Review {review_id} not found")
        return to_review_read(review)

    @classmethod
    async def create_review(cls, user_id: int, data: ReviewCreate) -> ReviewRead:
        """Create a review and refresh the restroom's average rating.

        Raises ``UserNotFoundError`` or ``RestroomNotFoundError`` before
        anything is written when either reference is unknown.
        """
        with transaction() as conn:
            if UserRepository(conn).find_by_id(user_id) is None:
                raise UserNotFoundError(f"User {user_id} not found")
            if RestroomRepository(conn).find_by_id(data.restroom_id) is None:
                raise RestroomNotFoundError(f"Restroom {data.restroom_id} not found")
            review = ReviewRepository(conn).save(
                user_id=user_id,
                restroom_id=data.restroom_id,
                review_content=data.review_content,
                rating=data.rating,
            )
            cls._update_average_rating(conn, data.restroom_id)
        logger.info("User %s created review %s for restroom %s", user_id, review.id, data.restroom_id)
        return to_review_read(review)

    @classmethod
    async def update_review(cls, user_id: int, review_id: int, data: ReviewUpdate) -> ReviewRead:
        """Edit a review owned by ``user_id``.

        Raises ``ReviewNotFoundError`` for an unknown id and
        ``AuthError`` when the caller is not the author.
        """
        with transaction() as conn:
            reviews = ReviewRepository(conn)
            existing = cls._get_owned_review(reviews, user_id, review_id)
            review = reviews.update(review_id, data.review_content, data.rating)
            cls._update_average_rating(conn, existing.restroom_id)
        logger.info("User %s updated review %s", user_id, review_id)
        return to_review_read(review)

    @classmethod
    async def delete_review(cls, user_id: int, review_id: int) -> None:
        """Delete a review owned by ``user_id`` and refresh the average."""
        with transaction() as conn:
            reviews = ReviewRepository(conn)
            existing = cls._get_owned_review(reviews, user_id, review_id)
            reviews.delete_by_id(review_id)
            cls._update_average_rating(conn, existing.restroom_id)
        logger.info("User %s deleted review %s of restroom %s", user_id, review_id, existing.restroom_id)

    @classmethod
    async def list_reviews_by_user(cls, user_id: int) -> List[ReviewRead]:
        """All reviews written by ``user_id``, newest first."""
        with transaction() as conn:
            if UserRepository(conn).find_by_id(user_id) is None:
                raise UserNotFoundError(f"User {user_id} not found")
            reviews = ReviewRepository(conn).find_all_by_user(user_id)
        return [to_review_read(review) for review in order_latest(reviews)]

    @classmethod
    async def list_latest(cls, restroom_id: int) -> List[ReviewRead]:
        reviews = cls._load_restroom_reviews(restroom_id)
        return [to_review_read(review) for review in order_latest(reviews)]

    @classmethod
    async def list_by_high_rating(cls, restroom_id: int) -> List[ReviewRead]:
        reviews = cls._load_restroom_reviews(restroom_id)
        return [to_review_read(review) for review in order_by_high_rating(reviews)]

    @classmethod
    async def list_by_low_rating(cls, restroom_id: int) -> List[ReviewRead]:
        reviews = cls._load_restroom_reviews(restroom_id)
        return [to_review_read(review) for review in order_by_low_rating(reviews)]

    @classmethod
    async def average_rating(cls, restroom_id: int) -> float:
        """Recompute and store a restroom's average rating on demand."""
        with transaction() as conn:
            return cls._update_average_rating(conn, restroom_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _get_owned_review(reviews: ReviewRepository, user_id: int, review_id: int) -> Review:
        review = reviews.find_by_id(review_id)
        if review is None:
            raise ReviewNotFoundError(f"Review {review_id} not found")
        if review.user_id != user_id:
            logger.warning("User %s tried to modify review %s owned by %s", user_id, review_id, review.user_id)
            raise AuthError("Only the author can modify this review")
        return review

    @staticmethod
    def _load_restroom_reviews(restroom_id: int) -> List[Review]:
        with transaction() as conn:
            if RestroomRepository(conn).find_by_id(restroom_id) is None:
                raise RestroomNotFoundError(f"Restroom {restroom_id} not found")
            return ReviewRepository(conn).find_all_by_restroom(restroom_id)

    @staticmethod
    def _update_average_rating(conn: sqlite3.Connection, restroom_id: int) -> float:
        """Write the mean of the restroom's active reviews onto the restroom."""
        restrooms = RestroomRepository(conn)
        if restrooms.find_by_id(restroom_id) is None:
            raise RestroomNotFoundError(f"Restroom {restroom_id} not found")
        average = mean_rating(ReviewRepository(conn).find_all_by_restroom(restroom_id))
        restrooms.update_average_rating(restroom_id, average)
        return average
