"""Pydantic schemas for payment setup."""

from pydantic import BaseModel, Field

from src.am_payment.domain.models import CardSummary


class AttachDefaultRequest(BaseModel):
    payment_method_id: str = Field(..., min_length=1, max_length=255)


class SetupIntentResponse(BaseModel):
    client_secret: str
    customer_id: str


class CardSummaryOut(BaseModel):
    payment_method_id: str
    brand: str | None
    last4: str | None
    exp_month: int | None
    exp_year: int | None

    @classmethod
    def from_domain(cls, card: CardSummary) -> "CardSummaryOut":
        return cls(
            payment_method_id=card.payment_method_id,
            brand=card.brand,
            last4=card.last4,
            exp_month=card.exp_month,
            exp_year=card.exp_year,
        )
