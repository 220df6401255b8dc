"""Stripe adapter for the PaymentProcessor port.

The Stripe SDK is synchronous; every call runs in the threadpool so the
event loop is never blocked on processor I/O. SDK errors are translated
into domain errors here and the raw processor message is logged.
"""

import logging
from typing import Any

import stripe
from fastapi.concurrency import run_in_threadpool

from config.settings import settings
from src.am_common.errors import PaymentProcessorError, WebhookSignatureError
from src.am_payment.domain.models import CardSummary, ChargeResult
from src.am_payment.domain.processor import CardDeclinedError

logger = logging.getLogger(__name__)


def _intent_id_from_card_error(exc: stripe.CardError) -> str | None:
    error = getattr(exc, "error", None)
    intent = getattr(error, "payment_intent", None) if error is not None else None
    if not intent:
        return None
    if isinstance(intent, str):
        return intent
    return intent.get("id")


class StripeProcessor:
    def __init__(self, api_key: str | None = None, webhook_secret: str | None = None) -> None:
        self._api_key = api_key or settings.STRIPE_SECRET_KEY
        self._webhook_secret = webhook_secret or settings.STRIPE_WEBHOOK_SECRET

    async def create_customer(self, user_id: str, email: str | None) -> str:
        try:
            customer = await run_in_threadpool(
                stripe.Customer.create,
                api_key=self._api_key,
                email=email,
                metadata={"app_user_id": user_id},
            )
        except stripe.StripeError as exc:
            logger.error("Stripe customer create failed for user %s: %s", user_id, exc)
            raise PaymentProcessorError() from exc
        return customer.id

    async def create_setup_intent(self, customer_id: str) -> str:
        try:
            intent = await run_in_threadpool(
                stripe.SetupIntent.create,
                api_key=self._api_key,
                customer=customer_id,
                usage="off_session",
                payment_method_types=["card"],
            )
        except stripe.StripeError as exc:
            logger.error("Stripe setup intent failed for customer %s: %s", customer_id, exc)
            raise PaymentProcessorError() from exc
        return intent.client_secret

    async def attach_default_payment_method(
        self, customer_id: str, payment_method_id: str
    ) -> CardSummary:
        try:
            await run_in_threadpool(
                stripe.PaymentMethod.attach,
                payment_method_id,
                api_key=self._api_key,
                customer=customer_id,
            )
            await run_in_threadpool(
                stripe.Customer.modify,
                customer_id,
                api_key=self._api_key,
                invoice_settings={"default_payment_method": payment_method_id},
            )
            pm = await run_in_threadpool(
                stripe.PaymentMethod.retrieve, payment_method_id, api_key=self._api_key
            )
        except stripe.StripeError as exc:
            logger.error(
                "Stripe attach failed: customer=%s pm=%s: %s", customer_id, payment_method_id, exc
            )
            raise PaymentProcessorError(getattr(exc, "user_message", None) or str(exc)) from exc

        card = getattr(pm, "card", None)
        if not card:
            return CardSummary(payment_method_id=pm.id)
        return CardSummary(
            payment_method_id=pm.id,
            brand=card.brand,
            last4=card.last4,
            exp_month=card.exp_month,
            exp_year=card.exp_year,
        )

    async def charge_off_session(
        self,
        customer_id: str,
        payment_method_id: str,
        amount_cents: int,
        currency: str,
        metadata: dict[str, str],
        idempotency_key: str,
        description: str | None = None,
    ) -> ChargeResult:
        try:
            intent = await run_in_threadpool(
                stripe.PaymentIntent.create,
                api_key=self._api_key,
                idempotency_key=idempotency_key,
                amount=amount_cents,
                currency=currency,
                customer=customer_id,
                payment_method=payment_method_id,
                off_session=True,
                confirm=True,
                metadata=metadata,
                description=description,
            )
        except stripe.CardError as exc:
            logger.warning("Card declined for customer %s: %s", customer_id, exc)
            raise CardDeclinedError(str(exc), _intent_id_from_card_error(exc)) from exc
        except stripe.StripeError as exc:
            logger.error("Stripe charge failed for customer %s: %s", customer_id, exc)
            raise PaymentProcessorError(str(exc)) from exc
        return ChargeResult(payment_intent_id=intent.id, status=intent.status)

    def parse_webhook(self, payload: bytes, signature: str | None) -> dict[str, Any]:
        if not signature:
            raise WebhookSignatureError()
        try:
            event = stripe.Webhook.construct_event(payload, signature, self._webhook_secret)
        except (ValueError, stripe.SignatureVerificationError) as exc:
            logger.warning("Webhook rejected: %s", exc)
            raise WebhookSignatureError() from exc
        return {
            "id": event["id"],
            "type": event["type"],
            "object": event["data"]["object"],
        }
