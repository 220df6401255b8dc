"""Domain models for am_bidding — pure dataclasses."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Bid:
    id: int
    auction_id: str
    user_id: str
    bid_amount: int
    created_at: datetime


@dataclass
class BiddableAuction:
    """The locked auction row a bid is validated against."""

    id: str
    status: str
    starting_price: int
    current_bid: int | None
    end_date: datetime


@dataclass
class MyBidRow:
    """One of the user's bids joined with its auction's current state."""

    auction_id: str
    title: str
    bid_amount: int
    current_bid: int | None
    starting_price: int
    end_date: datetime
    status: str


@dataclass
class MyBid:
    auction_id: str
    title: str
    my_bid: int
    current_bid: int | None
    starting_price: int
    end_date: datetime
    status: str


@dataclass
class MyBidsSummary:
    active: list[MyBid]
    outbid: list[MyBid]


@dataclass
class WonAuction:
    auction_id: str
    title: str
    winning_bid: int | None
    end_date: datetime
    payment_status: str | None


@dataclass
class WatchlistEntry:
    id: int
    user_id: str
    auction_id: str
    auction_item_id: str | None
    title: str
    status: str
    current_bid: int | None
    starting_price: int
    end_date: datetime
    created_at: datetime


@dataclass
class WatchTarget:
    """A watchlist target resolved to its auction and, for lots, its item."""

    auction_id: str
    auction_item_id: str | None
