"""Domain models for am_review."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Review:
    id: int
    user_id: str
    reviewer_id: str
    rating: int
    comment: str | None
    created_at: datetime
    updated_at: datetime
    reviewer_name: str | None = None


@dataclass
class RatingSummary:
    average: float | None
    total: int
