"""Domain models for am_notification."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Notification:
    id: int
    user_id: str
    type: str
    title: str
    message: str
    auction_id: str | None
    from_user_id: str | None
    read: bool
    created_at: datetime
