"""Repository Protocol for notification rows."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_notification.domain.models import Notification


class NotificationRepositoryProtocol(Protocol):
    async def insert(
        self,
        db: AsyncSession,
        user_id: str,
        type_: str,
        title: str,
        message: str,
        auction_id: str | None,
        from_user_id: str | None,
    ) -> int: ...

    async def list_for_user(
        self, db: AsyncSession, user_id: str, limit: int
    ) -> list[Notification]: ...

    async def count_unread(self, db: AsyncSession, user_id: str) -> int: ...

    async def mark_read(self, db: AsyncSession, user_id: str, notification_id: int) -> bool: ...

    async def exists_unread(
        self, db: AsyncSession, user_id: str, type_: str, auction_id: str
    ) -> bool: ...
