"""Pydantic schemas for reviews."""

import uuid

from pydantic import BaseModel, Field

from src.am_review.domain.models import Review


class UpsertReviewRequest(BaseModel):
    user_id: uuid.UUID
    # Range is checked by the service so it surfaces as a 400 AppError.
    rating: int
    comment: str | None = Field(None, max_length=2000)


class ReviewOut(BaseModel):
    id: int
    user_id: str
    reviewer_id: str
    reviewer_name: str | None
    rating: int
    comment: str | None
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, r: Review) -> "ReviewOut":
        return cls(
            id=r.id,
            user_id=r.user_id,
            reviewer_id=r.reviewer_id,
            reviewer_name=r.reviewer_name,
            rating=r.rating,
            comment=r.comment,
            created_at=r.created_at.isoformat(),
            updated_at=r.updated_at.isoformat(),
        )


class ReviewListResponse(BaseModel):
    items: list[ReviewOut]
    average_rating: float | None
    total: int
