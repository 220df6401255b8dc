"""Pydantic schemas for notification responses."""

from pydantic import BaseModel

from src.am_notification.domain.models import Notification


class NotificationOut(BaseModel):
    id: int
    type: str
    title: str
    message: str
    auction_id: str | None
    from_user_id: str | None
    read: bool
    created_at: str

    @classmethod
    def from_domain(cls, n: Notification) -> "NotificationOut":
        return cls(
            id=n.id,
            type=n.type,
            title=n.title,
            message=n.message,
            auction_id=n.auction_id,
            from_user_id=n.from_user_id,
            read=n.read,
            created_at=n.created_at.isoformat(),
        )


class NotificationListResponse(BaseModel):
    items: list[NotificationOut]
    unread_count: int
