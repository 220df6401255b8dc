"""Payment processor port.

The settlement and payment services depend on this Protocol; the Stripe
adapter in infrastructure implements it and unit tests pass an AsyncMock.
"""

from typing import Any, Protocol

from src.am_payment.domain.models import CardSummary, ChargeResult


class CardDeclinedError(Exception):
    """The processor refused the charge.

    payment_intent_id is set when the processor still created an intent,
    in which case the attempt is recorded with status ``failed``.
    """

    def __init__(self, message: str, payment_intent_id: str | None = None) -> None:
        self.payment_intent_id = payment_intent_id
        super().__init__(message)


class PaymentProcessor(Protocol):
    async def create_customer(self, user_id: str, email: str | None) -> str: ...

    async def create_setup_intent(self, customer_id: str) -> str: ...

    async def attach_default_payment_method(
        self, customer_id: str, payment_method_id: str
    ) -> CardSummary: ...

    async def charge_off_session(
        self,
        customer_id: str,
        payment_method_id: str,
        amount_cents: int,
        currency: str,
        metadata: dict[str, str],
        idempotency_key: str,
        description: str | None = None,
    ) -> ChargeResult: ...

    def parse_webhook(self, payload: bytes, signature: str | None) -> dict[str, Any]: ...
