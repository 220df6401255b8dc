"""ReviewRepository — parameterized raw SQL."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.am_review.domain.models import RatingSummary, Review

_USER_EXISTS_SQL = text("SELECT 1 FROM users WHERE id = :user_id")

# One review per (reviewed user, reviewer). A NULL comment keeps the old one.
_UPSERT_SQL = text("""
    INSERT INTO user_reviews (user_id, reviewer_id, rating, comment)
    VALUES (:user_id, :reviewer_id, :rating, :comment)
    ON CONFLICT (user_id, reviewer_id) DO UPDATE
    SET rating = EXCLUDED.rating,
        comment = COALESCE(EXCLUDED.comment, user_reviews.comment),
        updated_at = NOW()
    RETURNING id, user_id, reviewer_id, rating, comment, created_at, updated_at
""")

_LIST_SQL = text("""
    SELECT r.id, r.user_id, r.reviewer_id, r.rating, r.comment,
           r.created_at, r.updated_at, u.full_name AS reviewer_name
    FROM user_reviews r
    LEFT JOIN users u ON u.id = r.reviewer_id
    WHERE r.user_id = :user_id
    ORDER BY r.created_at DESC, r.id DESC
    LIMIT :limit OFFSET :offset
""")

_SUMMARY_SQL = text("""
    SELECT AVG(rating)::float AS average, COUNT(*) AS total
    FROM user_reviews
    WHERE user_id = :user_id
""")


def _row_to_review(row: object) -> Review:
    return Review(
        id=row.id,  # type: ignore[attr-defined]
        user_id=str(row.user_id),  # type: ignore[attr-defined]
        reviewer_id=str(row.reviewer_id),  # type: ignore[attr-defined]
        rating=row.rating,  # type: ignore[attr-defined]
        comment=row.comment,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
        reviewer_name=getattr(row, "reviewer_name", None),
    )


class ReviewRepository:
    async def user_exists(self, db: AsyncSession, user_id: str) -> bool:
        result = await db.execute(_USER_EXISTS_SQL, {"user_id": user_id})
        return result.fetchone() is not None

    async def upsert_review(
        self,
        db: AsyncSession,
        user_id: str,
        reviewer_id: str,
        rating: int,
        comment: str | None,
    ) -> Review:
        result = await db.execute(
            _UPSERT_SQL,
            {
                "user_id": user_id,
                "reviewer_id": reviewer_id,
                "rating": rating,
                "comment": comment,
            },
        )
        return _row_to_review(result.fetchone())

    async def list_reviews(
        self, db: AsyncSession, user_id: str, limit: int, offset: int
    ) -> list[Review]:
        result = await db.execute(
            _LIST_SQL, {"user_id": user_id, "limit": limit, "offset": offset}
        )
        return [_row_to_review(row) for row in result.fetchall()]

    async def rating_summary(self, db: AsyncSession, user_id: str) -> RatingSummary:
        row = (await db.execute(_SUMMARY_SQL, {"user_id": user_id})).fetchone()
        if row is None:
            return RatingSummary(average=None, total=0)
        return RatingSummary(average=row.average, total=int(row.total))
