"""PaymentApplicationService — card setup and processor webhooks.

Charging winners is not done here; see am_settlement.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_common.errors import NoProcessorCustomerError
from src.am_payment.application.schemas import CardSummaryOut, SetupIntentResponse
from src.am_payment.domain.processor import PaymentProcessor
from src.am_payment.domain.repository import (
    CustomerRepositoryProtocol,
    PaymentRepositoryProtocol,
)
from src.am_payment.infrastructure.persistence import CustomerRepository, PaymentRepository
from src.am_payment.infrastructure.stripe_processor import StripeProcessor

logger = logging.getLogger(__name__)

# Events that move a recorded charge to a new status.
_INTENT_STATUS_EVENTS = {
    "payment_intent.succeeded": "succeeded",
    "payment_intent.payment_failed": "failed",
}


class PaymentApplicationService:
    def __init__(
        self,
        processor: PaymentProcessor | None = None,
        customers: CustomerRepositoryProtocol | None = None,
        payments: PaymentRepositoryProtocol | None = None,
    ) -> None:
        self._processor = processor
        self._customers: CustomerRepositoryProtocol = customers or CustomerRepository()
        self._payments: PaymentRepositoryProtocol = payments or PaymentRepository()

    @property
    def processor(self) -> PaymentProcessor:
        if self._processor is None:
            self._processor = StripeProcessor()
        return self._processor

    async def create_setup_intent(
        self, db: AsyncSession, user_id: str, email: str | None
    ) -> SetupIntentResponse:
        try:
            customer = await self._customers.get_customer(db, user_id)
            customer_id = customer.stripe_customer_id if customer else None
            if not customer_id:
                customer_id = await self.processor.create_customer(user_id, email)
                await self._customers.upsert_processor_customer(db, user_id, customer_id)
                await db.commit()
                logger.info("Processor customer created: user=%s customer=%s", user_id, customer_id)
        except Exception:
            await db.rollback()
            raise
        client_secret = await self.processor.create_setup_intent(customer_id)
        return SetupIntentResponse(client_secret=client_secret, customer_id=customer_id)

    async def attach_default(
        self, db: AsyncSession, user_id: str, payment_method_id: str
    ) -> CardSummaryOut:
        try:
            customer = await self._customers.get_customer(db, user_id)
            if customer is None or not customer.stripe_customer_id:
                raise NoProcessorCustomerError()
            card = await self.processor.attach_default_payment_method(
                customer.stripe_customer_id, payment_method_id
            )
            await self._customers.set_payment_method(db, user_id, card)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Default payment method set: user=%s pm=%s", user_id, card.payment_method_id)
        return CardSummaryOut.from_domain(card)

    async def handle_webhook(
        self, db: AsyncSession, payload: bytes, signature: str | None
    ) -> dict[str, object]:
        event = self.processor.parse_webhook(payload, signature)
        event_type = event["type"]
        obj = event["object"]

        if event_type == "checkout.session.completed":
            logger.info("Checkout session completed: %s", obj.get("id"))
        elif event_type in _INTENT_STATUS_EVENTS:
            intent_id = obj.get("id")
            status = _INTENT_STATUS_EVENTS[event_type]
            try:
                updated = await self._payments.update_status_by_intent(db, intent_id, status)
                await db.commit()
            except Exception:
                await db.rollback()
                raise
            logger.info(
                "Webhook %s: intent=%s status=%s rows=%d", event_type, intent_id, status, updated
            )
        else:
            logger.debug("Webhook event ignored: %s", event_type)
        return {"received": True, "type": event_type}
