"""PaymentCharger — charge the winners of ended auctions.

Candidates: status='ended', winner_id set, no payment record. Each auction
is locked, re-checked, settled and committed on its own. Every outcome sends
the winner one notification, except that an auction another run already
settled is skipped silently and a missing-card reminder is not repeated while
the previous one is unread. The idempotency key ``auction_<id>_winner_<user>``
makes a charge that succeeded at the processor but failed to persist safe
to retry on the next run.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.am_common.cents import to_minor_units
from src.am_common.enums import ChargeOutcome, NotificationType
from src.am_notification.application.notifier import Notifier
from src.am_payment.domain.models import NewPayment
from src.am_payment.domain.processor import CardDeclinedError, PaymentProcessor
from src.am_payment.domain.repository import (
    CustomerRepositoryProtocol,
    PaymentRepositoryProtocol,
)
from src.am_payment.infrastructure.persistence import CustomerRepository, PaymentRepository
from src.am_payment.infrastructure.stripe_processor import StripeProcessor
from src.am_settlement.domain.models import ChargeCandidate, ChargeResult
from src.am_settlement.domain.repository import SettlementRepositoryProtocol
from src.am_settlement.infrastructure.persistence import SettlementRepository

logger = logging.getLogger(__name__)

_REMINDER_OUTCOMES = {ChargeOutcome.NO_CUSTOMER.value, ChargeOutcome.NO_PAYMENT_METHOD.value}


def idempotency_key(auction_id: str, winner_id: str) -> str:
    return f"auction_{auction_id}_winner_{winner_id}"


class PaymentCharger:
    def __init__(
        self,
        processor: PaymentProcessor | None = None,
        repo: SettlementRepositoryProtocol | None = None,
        customers: CustomerRepositoryProtocol | None = None,
        payments: PaymentRepositoryProtocol | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self._processor = processor
        self._repo: SettlementRepositoryProtocol = repo or SettlementRepository()
        self._customers: CustomerRepositoryProtocol = customers or CustomerRepository()
        self._payments: PaymentRepositoryProtocol = payments or PaymentRepository()
        self._notifier = notifier or Notifier()

    @property
    def processor(self) -> PaymentProcessor:
        if self._processor is None:
            self._processor = StripeProcessor()
        return self._processor

    async def charge_winners(self, db: AsyncSession) -> list[ChargeResult]:
        candidates = await self._repo.list_charge_candidates(db)
        await db.commit()

        results = [await self._charge_one(db, c) for c in candidates]
        logger.info(
            "Charge pass: %d candidate(s), %d charged",
            len(candidates),
            sum(1 for r in results if r.outcome == ChargeOutcome.CHARGED),
        )
        return results

    async def _charge_one(self, db: AsyncSession, c: ChargeCandidate) -> ChargeResult:
        amount = to_minor_units(c.winning_bid or 0)
        result = ChargeResult(
            auction_id=c.auction_id,
            winner_id=c.winner_id,
            outcome=ChargeOutcome.ERROR.value,
            amount_cents=amount,
        )
        try:
            if not await self._repo.lock_charge_candidate(db, c.auction_id):
                # Settled or being settled by a concurrent run.
                result.outcome = ChargeOutcome.SKIPPED.value
            else:
                await self._settle(db, c, result)
            if result.outcome == ChargeOutcome.SKIPPED:
                await db.rollback()
                logger.info("Skipped auction %s: already settled", c.auction_id)
                return result
            if await self._already_reminded(db, c, result):
                logger.info(
                    "Winner %s of auction %s already has an unread payment reminder",
                    c.winner_id, c.auction_id,
                )
            else:
                await self._notifier.notify_settlement_outcome(
                    db, c.winner_id, c.auction_id, c.title,
                    ChargeOutcome(result.outcome), amount, result.payment_status,
                )
            await db.commit()
            return result
        except Exception as exc:
            await db.rollback()
            logger.exception("Failed to charge winner of auction %s", c.auction_id)
            result.outcome = ChargeOutcome.ERROR.value
            result.error = str(exc)

        # The settlement transaction is gone; tell the winner in a fresh one.
        try:
            await self._notifier.notify_settlement_outcome(
                db, c.winner_id, c.auction_id, c.title, ChargeOutcome.ERROR, amount
            )
            await db.commit()
        except Exception:
            await db.rollback()
            logger.exception("Failed to notify winner %s of auction %s", c.winner_id, c.auction_id)
        return result

    async def _settle(self, db: AsyncSession, c: ChargeCandidate, result: ChargeResult) -> None:
        """Fill result in place. Raises on processor or database errors."""
        customer = await self._customers.get_customer(db, c.winner_id)
        if customer is None or not customer.stripe_customer_id:
            logger.warning("Winner %s of auction %s has no processor customer", c.winner_id, c.auction_id)
            result.outcome = ChargeOutcome.NO_CUSTOMER.value
            result.error = "Winner has no payment customer on file"
            return
        if not customer.payment_method_id:
            logger.warning("Winner %s of auction %s has no payment method", c.winner_id, c.auction_id)
            result.outcome = ChargeOutcome.NO_PAYMENT_METHOD.value
            result.error = "Winner has no payment method on file"
            return

        try:
            charge = await self.processor.charge_off_session(
                customer_id=customer.stripe_customer_id,
                payment_method_id=customer.payment_method_id,
                amount_cents=result.amount_cents,
                currency=settings.PAYMENT_CURRENCY,
                metadata={
                    "auction_id": c.auction_id,
                    "winner_id": c.winner_id,
                    "type": "winner_charge",
                },
                idempotency_key=idempotency_key(c.auction_id, c.winner_id),
                description=f"Won: {c.title}",
            )
        except CardDeclinedError as exc:
            result.outcome = ChargeOutcome.CHARGE_FAILED.value
            result.error = str(exc)
            if exc.payment_intent_id:
                result.payment_intent_id = exc.payment_intent_id
                result.payment_status = "failed"
                if not await self._record(db, c, result):
                    result.outcome = ChargeOutcome.SKIPPED.value
            return

        result.outcome = ChargeOutcome.CHARGED.value
        result.payment_intent_id = charge.payment_intent_id
        result.payment_status = charge.status
        if not await self._record(db, c, result):
            result.outcome = ChargeOutcome.SKIPPED.value
            return
        logger.info(
            "Charged winner %s for auction %s: %d cents, intent=%s status=%s",
            c.winner_id, c.auction_id, result.amount_cents,
            charge.payment_intent_id, charge.status,
        )

    async def _record(self, db: AsyncSession, c: ChargeCandidate, result: ChargeResult) -> bool:
        inserted = await self._payments.insert_payment(
            db,
            NewPayment(
                user_id=c.winner_id,
                auction_id=c.auction_id,
                amount_cents=result.amount_cents,
                currency=settings.PAYMENT_CURRENCY,
                payment_intent_id=result.payment_intent_id,
                status=result.payment_status or "failed",
            ),
        )
        if not inserted:
            logger.warning("Payment record for auction %s already exists", c.auction_id)
        return inserted

    async def _already_reminded(
        self, db: AsyncSession, c: ChargeCandidate, result: ChargeResult
    ) -> bool:
        """Missing-card outcomes repeat every run until the winner adds a card."""
        if result.outcome not in _REMINDER_OUTCOMES:
            return False
        return await self._notifier.has_unread(
            db, c.winner_id, NotificationType.PAYMENT_FAILED, c.auction_id
        )
