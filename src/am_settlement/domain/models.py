"""Domain models for am_settlement — pure dataclasses."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class ClosingAuction:
    """An active auction locked for close-out."""

    id: str
    title: str
    end_date: datetime


@dataclass
class BidCandidate:
    id: int
    user_id: str
    bid_amount: int
    created_at: datetime


@dataclass
class CloseResult:
    auction_id: str
    status: str
    winner_id: str | None = None
    winning_bid: int | None = None
    error: str | None = None


@dataclass
class ChargeCandidate:
    """An ended auction with a winner and no payment record yet."""

    auction_id: str
    title: str
    winner_id: str
    winning_bid: int | None


@dataclass
class ChargeResult:
    auction_id: str
    winner_id: str
    outcome: str
    amount_cents: int
    payment_intent_id: str | None = None
    payment_status: str | None = None
    error: str | None = None
