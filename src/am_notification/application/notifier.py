"""Notifier — writes user-facing notification rows.

The notifier never commits: rows land in the caller's transaction, so a
settlement step that rolls back takes its notification with it.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_common.cents import cents_to_display
from src.am_common.enums import ChargeOutcome, NotificationType
from src.am_notification.domain.repository import NotificationRepositoryProtocol
from src.am_notification.infrastructure.persistence import NotificationRepository

logger = logging.getLogger(__name__)


class Notifier:
    def __init__(self, repo: NotificationRepositoryProtocol | None = None) -> None:
        self._repo: NotificationRepositoryProtocol = repo or NotificationRepository()

    async def notify(
        self,
        db: AsyncSession,
        user_id: str,
        type_: NotificationType,
        title: str,
        message: str,
        auction_id: str | None = None,
        from_user_id: str | None = None,
    ) -> int:
        notification_id = await self._repo.insert(
            db, user_id, type_.value, title, message, auction_id, from_user_id
        )
        logger.debug("Notification %d queued: user=%s type=%s", notification_id, user_id, type_.value)
        return notification_id

    async def has_unread(
        self, db: AsyncSession, user_id: str, type_: NotificationType, auction_id: str
    ) -> bool:
        return await self._repo.exists_unread(db, user_id, type_.value, auction_id)

    async def notify_settlement_outcome(
        self,
        db: AsyncSession,
        winner_id: str,
        auction_id: str,
        auction_title: str,
        outcome: ChargeOutcome,
        amount_cents: int,
        processor_status: str | None = None,
    ) -> int:
        """Send the winner exactly one notification describing the charge result."""
        amount = cents_to_display(amount_cents)
        if outcome == ChargeOutcome.CHARGED and processor_status == "succeeded":
            return await self.notify(
                db, winner_id, NotificationType.AUCTION_WON,
                "Congratulations! You Won!",
                f'You won "{auction_title}" for {amount}. Payment completed successfully!',
                auction_id,
            )
        if outcome == ChargeOutcome.CHARGED and processor_status == "requires_action":
            return await self.notify(
                db, winner_id, NotificationType.PAYMENT_ACTION_REQUIRED,
                "Action Required: Confirm Your Payment",
                f'You won "{auction_title}" for {amount}. Your bank requires you '
                "to confirm the payment.",
                auction_id,
            )
        if outcome == ChargeOutcome.CHARGED and processor_status == "processing":
            return await self.notify(
                db, winner_id, NotificationType.AUCTION_WON,
                "Congratulations! You Won!",
                f'You won "{auction_title}" for {amount}. Your payment is processing.',
                auction_id,
            )
        if outcome in (ChargeOutcome.NO_CUSTOMER, ChargeOutcome.NO_PAYMENT_METHOD):
            return await self.notify(
                db, winner_id, NotificationType.PAYMENT_FAILED,
                "Action Required: Add Payment Method",
                f'You won "{auction_title}" but don\'t have a payment method on file. '
                "Please add one to complete your purchase.",
                auction_id,
            )
        return await self.notify(
            db, winner_id, NotificationType.PAYMENT_FAILED,
            "Payment Failed",
            f'Your payment for "{auction_title}" failed. '
            "Please update your payment method and try again.",
            auction_id,
        )

    async def notify_connection_response(
        self,
        db: AsyncSession,
        requester_id: str,
        responder_id: str,
        accepted: bool,
        responder_name: str | None = None,
    ) -> int:
        who = responder_name or "A user"
        if accepted:
            return await self.notify(
                db, requester_id, NotificationType.CONNECTION_ACCEPTED,
                "Connection Accepted",
                f"{who} accepted your connection request.",
                from_user_id=responder_id,
            )
        return await self.notify(
            db, requester_id, NotificationType.CONNECTION_REJECTED,
            "Connection Declined",
            f"{who} declined your connection request.",
            from_user_id=responder_id,
        )
