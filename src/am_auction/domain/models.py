"""Domain models for am_auction — pure dataclasses, no business logic."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class AuctionItem:
    """A catalog lot displayed within an auction. Bids target the auction."""

    id: str
    auction_id: str
    title: str
    description: str | None
    starting_price: int
    position: int


@dataclass
class Auction:
    id: str
    title: str
    description: str | None
    category: str | None
    status: str
    starting_price: int
    current_bid: int | None
    start_date: datetime | None
    end_date: datetime
    created_by: str
    winner_id: str | None
    created_at: datetime
    updated_at: datetime
    items: list[AuctionItem] = field(default_factory=list)


@dataclass
class NewAuctionItem:
    title: str
    description: str | None
    starting_price: int
    position: int


@dataclass
class NewAuction:
    title: str
    description: str | None
    category: str | None
    status: str
    starting_price: int
    start_date: datetime
    end_date: datetime
    created_by: str
    items: list[NewAuctionItem] = field(default_factory=list)
