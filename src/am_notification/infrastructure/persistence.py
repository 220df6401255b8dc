"""NotificationRepository — raw text() SQL.

Only ``read`` is ever mutated after insert.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.am_notification.domain.models import Notification

_INSERT_SQL = text("""
    INSERT INTO notifications (user_id, type, title, message, auction_id, from_user_id)
    VALUES (:user_id, :type, :title, :message, :auction_id, :from_user_id)
    RETURNING id
""")

_LIST_SQL = text("""
    SELECT id, user_id, type, title, message, auction_id, from_user_id, read, created_at
    FROM notifications
    WHERE user_id = :user_id
    ORDER BY created_at DESC, id DESC
    LIMIT :limit
""")

_COUNT_UNREAD_SQL = text("""
    SELECT COUNT(*) FROM notifications WHERE user_id = :user_id AND read = FALSE
""")

_EXISTS_UNREAD_SQL = text("""
    SELECT 1 FROM notifications
    WHERE user_id = :user_id
      AND type = :type
      AND auction_id = :auction_id
      AND read = FALSE
    LIMIT 1
""")

# Ownership is part of the predicate: another user's id matches zero rows.
_MARK_READ_SQL = text("""
    UPDATE notifications
    SET read = TRUE
    WHERE id = :notification_id AND user_id = :user_id
    RETURNING id
""")


def _row_to_notification(row: object) -> Notification:
    return Notification(
        id=row.id,  # type: ignore[attr-defined]
        user_id=str(row.user_id),  # type: ignore[attr-defined]
        type=row.type,  # type: ignore[attr-defined]
        title=row.title,  # type: ignore[attr-defined]
        message=row.message,  # type: ignore[attr-defined]
        auction_id=str(row.auction_id) if row.auction_id else None,  # type: ignore[attr-defined]
        from_user_id=str(row.from_user_id) if row.from_user_id else None,  # type: ignore[attr-defined]
        read=row.read,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class NotificationRepository:
    async def insert(
        self,
        db: AsyncSession,
        user_id: str,
        type_: str,
        title: str,
        message: str,
        auction_id: str | None,
        from_user_id: str | None,
    ) -> int:
        result = await db.execute(
            _INSERT_SQL,
            {
                "user_id": user_id,
                "type": type_,
                "title": title,
                "message": message,
                "auction_id": auction_id,
                "from_user_id": from_user_id,
            },
        )
        return result.scalar_one()

    async def list_for_user(
        self, db: AsyncSession, user_id: str, limit: int
    ) -> list[Notification]:
        result = await db.execute(_LIST_SQL, {"user_id": user_id, "limit": limit})
        return [_row_to_notification(row) for row in result.fetchall()]

    async def count_unread(self, db: AsyncSession, user_id: str) -> int:
        result = await db.execute(_COUNT_UNREAD_SQL, {"user_id": user_id})
        return int(result.scalar_one())

    async def mark_read(self, db: AsyncSession, user_id: str, notification_id: int) -> bool:
        result = await db.execute(
            _MARK_READ_SQL, {"notification_id": notification_id, "user_id": user_id}
        )
        return result.fetchone() is not None

    async def exists_unread(
        self, db: AsyncSession, user_id: str, type_: str, auction_id: str
    ) -> bool:
        result = await db.execute(
            _EXISTS_UNREAD_SQL,
            {"user_id": user_id, "type": type_, "auction_id": auction_id},
        )
        return result.fetchone() is not None
