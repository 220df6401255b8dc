"""Pydantic schemas for settlement run responses."""

from pydantic import BaseModel

from src.am_settlement.domain.models import ChargeResult, CloseResult


class CloseResultOut(BaseModel):
    auction_id: str
    status: str
    winner_id: str | None
    winning_bid_cents: int | None
    error: str | None

    @classmethod
    def from_domain(cls, r: CloseResult) -> "CloseResultOut":
        return cls(
            auction_id=r.auction_id,
            status=r.status,
            winner_id=r.winner_id,
            winning_bid_cents=r.winning_bid,
            error=r.error,
        )


class EndAuctionsResponse(BaseModel):
    published: list[str]
    processed: int
    results: list[CloseResultOut]


class ChargeResultOut(BaseModel):
    auction_id: str
    winner_id: str
    outcome: str
    amount_cents: int
    payment_intent_id: str | None
    payment_status: str | None
    error: str | None

    @classmethod
    def from_domain(cls, r: ChargeResult) -> "ChargeResultOut":
        return cls(
            auction_id=r.auction_id,
            winner_id=r.winner_id,
            outcome=r.outcome,
            amount_cents=r.amount_cents,
            payment_intent_id=r.payment_intent_id,
            payment_status=r.payment_status,
            error=r.error,
        )


class ProcessWinnersResponse(BaseModel):
    processed: int
    results: list[ChargeResultOut]
