"""Repository Protocols for customers and payment records."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_payment.domain.models import CardSummary, Customer, NewPayment


class CustomerRepositoryProtocol(Protocol):
    async def get_customer(self, db: AsyncSession, user_id: str) -> Customer | None: ...

    async def upsert_processor_customer(
        self, db: AsyncSession, user_id: str, stripe_customer_id: str
    ) -> None: ...

    async def set_payment_method(
        self, db: AsyncSession, user_id: str, card: CardSummary
    ) -> None: ...


class PaymentRepositoryProtocol(Protocol):
    async def insert_payment(self, db: AsyncSession, payment: NewPayment) -> bool: ...

    async def update_status_by_intent(
        self, db: AsyncSession, payment_intent_id: str, status: str
    ) -> int: ...
