"""CustomerRepository and PaymentRepository — raw text() SQL.

Transaction ownership: the CALLER commits or rolls back.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.am_payment.domain.models import CardSummary, Customer, NewPayment

_GET_CUSTOMER_SQL = text("""
    SELECT user_id, stripe_customer_id, payment_method_id
    FROM customers
    WHERE user_id = :user_id
""")

_UPSERT_CUSTOMER_SQL = text("""
    INSERT INTO customers (user_id, stripe_customer_id)
    VALUES (:user_id, :stripe_customer_id)
    ON CONFLICT (user_id) DO UPDATE
    SET stripe_customer_id = EXCLUDED.stripe_customer_id,
        updated_at = NOW()
""")

_SET_PAYMENT_METHOD_SQL = text("""
    UPDATE customers
    SET payment_method_id = :payment_method_id,
        card_brand = :brand,
        card_last4 = :last4,
        card_exp_month = :exp_month,
        card_exp_year = :exp_year,
        updated_at = NOW()
    WHERE user_id = :user_id
""")

# One record per auction; a second settlement run inserts nothing.
_INSERT_PAYMENT_SQL = text("""
    INSERT INTO payments
        (user_id, auction_id, amount_cents, currency, payment_intent_id, status)
    VALUES
        (:user_id, :auction_id, :amount_cents, :currency, :payment_intent_id, :status)
    ON CONFLICT (auction_id) DO NOTHING
    RETURNING id
""")

_UPDATE_STATUS_BY_INTENT_SQL = text("""
    UPDATE payments
    SET status = :status, updated_at = NOW()
    WHERE payment_intent_id = :payment_intent_id
""")


class CustomerRepository:
    async def get_customer(self, db: AsyncSession, user_id: str) -> Customer | None:
        result = await db.execute(_GET_CUSTOMER_SQL, {"user_id": user_id})
        row = result.fetchone()
        if row is None:
            return None
        return Customer(
            user_id=str(row.user_id),
            stripe_customer_id=row.stripe_customer_id,
            payment_method_id=row.payment_method_id,
        )

    async def upsert_processor_customer(
        self, db: AsyncSession, user_id: str, stripe_customer_id: str
    ) -> None:
        await db.execute(
            _UPSERT_CUSTOMER_SQL,
            {"user_id": user_id, "stripe_customer_id": stripe_customer_id},
        )

    async def set_payment_method(
        self, db: AsyncSession, user_id: str, card: CardSummary
    ) -> None:
        await db.execute(
            _SET_PAYMENT_METHOD_SQL,
            {
                "user_id": user_id,
                "payment_method_id": card.payment_method_id,
                "brand": card.brand,
                "last4": card.last4,
                "exp_month": card.exp_month,
                "exp_year": card.exp_year,
            },
        )


class PaymentRepository:
    async def insert_payment(self, db: AsyncSession, payment: NewPayment) -> bool:
        """Insert a payment record. Returns False if the auction already has one."""
        result = await db.execute(
            _INSERT_PAYMENT_SQL,
            {
                "user_id": payment.user_id,
                "auction_id": payment.auction_id,
                "amount_cents": payment.amount_cents,
                "currency": payment.currency,
                "payment_intent_id": payment.payment_intent_id,
                "status": payment.status,
            },
        )
        return result.fetchone() is not None

    async def update_status_by_intent(
        self, db: AsyncSession, payment_intent_id: str, status: str
    ) -> int:
        result = await db.execute(
            _UPDATE_STATUS_BY_INTENT_SQL,
            {"payment_intent_id": payment_intent_id, "status": status},
        )
        return result.rowcount
