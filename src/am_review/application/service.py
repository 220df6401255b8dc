"""ReviewApplicationService — user-to-user ratings."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_common.errors import InvalidRatingError, ReviewedUserNotFoundError, SelfReviewError
from src.am_review.application.schemas import ReviewListResponse, ReviewOut
from src.am_review.domain.repository import ReviewRepositoryProtocol
from src.am_review.infrastructure.persistence import ReviewRepository

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class ReviewApplicationService:
    def __init__(self, repo: ReviewRepositoryProtocol | None = None) -> None:
        self._repo: ReviewRepositoryProtocol = repo or ReviewRepository()

    async def upsert_review(
        self,
        db: AsyncSession,
        reviewer_id: str,
        user_id: str,
        rating: int,
        comment: str | None,
    ) -> ReviewOut:
        if user_id == reviewer_id:
            raise SelfReviewError()
        if not MIN_RATING <= rating <= MAX_RATING:
            raise InvalidRatingError()
        if comment is not None and not comment.strip():
            comment = None

        try:
            if not await self._repo.user_exists(db, user_id):
                raise ReviewedUserNotFoundError(user_id)
            review = await self._repo.upsert_review(db, user_id, reviewer_id, rating, comment)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Review saved: user=%s reviewer=%s rating=%d", user_id, reviewer_id, rating)
        return ReviewOut.from_domain(review)

    async def list_reviews(
        self, db: AsyncSession, user_id: str, limit: int, offset: int
    ) -> ReviewListResponse:
        reviews = await self._repo.list_reviews(db, user_id, limit, offset)
        summary = await self._repo.rating_summary(db, user_id)
        average = round(summary.average, 2) if summary.average is not None else None
        return ReviewListResponse(
            items=[ReviewOut.from_domain(r) for r in reviews],
            average_rating=average,
            total=summary.total,
        )
