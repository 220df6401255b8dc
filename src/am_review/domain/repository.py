"""Repository Protocol for user reviews."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_review.domain.models import RatingSummary, Review


class ReviewRepositoryProtocol(Protocol):
    async def user_exists(self, db: AsyncSession, user_id: str) -> bool: ...

    async def upsert_review(
        self,
        db: AsyncSession,
        user_id: str,
        reviewer_id: str,
        rating: int,
        comment: str | None,
    ) -> Review: ...

    async def list_reviews(
        self, db: AsyncSession, user_id: str, limit: int, offset: int
    ) -> list[Review]: ...

    async def rating_summary(self, db: AsyncSession, user_id: str) -> RatingSummary: ...
