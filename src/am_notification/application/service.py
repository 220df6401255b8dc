"""NotificationApplicationService — the recipient's read side."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_common.errors import NotificationNotFoundError
from src.am_notification.application.schemas import (
    NotificationListResponse,
    NotificationOut,
)
from src.am_notification.domain.repository import NotificationRepositoryProtocol
from src.am_notification.infrastructure.persistence import NotificationRepository


class NotificationApplicationService:
    def __init__(self, repo: NotificationRepositoryProtocol | None = None) -> None:
        self._repo: NotificationRepositoryProtocol = repo or NotificationRepository()

    async def list_notifications(
        self, db: AsyncSession, user_id: str, limit: int
    ) -> NotificationListResponse:
        rows = await self._repo.list_for_user(db, user_id, limit)
        unread = await self._repo.count_unread(db, user_id)
        return NotificationListResponse(
            items=[NotificationOut.from_domain(n) for n in rows], unread_count=unread
        )

    async def unread_count(self, db: AsyncSession, user_id: str) -> int:
        return await self._repo.count_unread(db, user_id)

    async def mark_read(self, db: AsyncSession, user_id: str, notification_id: int) -> None:
        try:
            updated = await self._repo.mark_read(db, user_id, notification_id)
            if not updated:
                raise NotificationNotFoundError(notification_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
