"""Domain models for am_payment."""

from dataclasses import dataclass


@dataclass
class CardSummary:
    """Light card description stored for display; never the card itself."""

    payment_method_id: str
    brand: str | None = None
    last4: str | None = None
    exp_month: int | None = None
    exp_year: int | None = None


@dataclass
class Customer:
    user_id: str
    stripe_customer_id: str | None
    payment_method_id: str | None


@dataclass
class ChargeResult:
    payment_intent_id: str
    status: str


@dataclass
class NewPayment:
    user_id: str
    auction_id: str
    amount_cents: int
    currency: str
    payment_intent_id: str | None
    status: str
