"""Pydantic schemas for am_auction requests and responses."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.am_auction.domain.models import Auction, AuctionItem
from src.am_common.cents import cents_to_display
from src.am_common.datetime_utils import iso_or_none

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class CreateAuctionItemRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    starting_price_cents: int = Field(..., gt=0)


class CreateAuctionRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    category: str | None = Field(None, max_length=64)
    status: str = "draft"
    starting_price_cents: int = Field(..., gt=0)
    start_date: datetime | None = None
    end_date: datetime
    items: list[CreateAuctionItemRequest] = Field(default_factory=list, max_length=50)


class UpdateStatusRequest(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class AuctionItemOut(BaseModel):
    id: str
    title: str
    description: str | None
    starting_price_cents: int
    position: int

    @classmethod
    def from_domain(cls, item: AuctionItem) -> "AuctionItemOut":
        return cls(
            id=item.id,
            title=item.title,
            description=item.description,
            starting_price_cents=item.starting_price,
            position=item.position,
        )


class AuctionListItem(BaseModel):
    id: str
    title: str
    category: str | None
    status: str
    starting_price_cents: int
    current_bid_cents: int | None
    current_bid_display: str | None
    start_date: str | None
    end_date: str

    @classmethod
    def from_domain(cls, a: Auction) -> "AuctionListItem":
        return cls(
            id=a.id,
            title=a.title,
            category=a.category,
            status=a.status,
            starting_price_cents=a.starting_price,
            current_bid_cents=a.current_bid,
            current_bid_display=(
                cents_to_display(a.current_bid) if a.current_bid is not None else None
            ),
            start_date=iso_or_none(a.start_date),
            end_date=a.end_date.isoformat(),
        )


class AuctionListResponse(BaseModel):
    items: list[AuctionListItem]


class AuctionDetail(BaseModel):
    id: str
    title: str
    description: str | None
    category: str | None
    status: str
    starting_price_cents: int
    starting_price_display: str
    current_bid_cents: int | None
    current_bid_display: str | None
    start_date: str | None
    end_date: str
    created_by: str
    winner_id: str | None
    created_at: str
    updated_at: str
    items: list[AuctionItemOut]

    @classmethod
    def from_domain(cls, a: Auction) -> "AuctionDetail":
        return cls(
            id=a.id,
            title=a.title,
            description=a.description,
            category=a.category,
            status=a.status,
            starting_price_cents=a.starting_price,
            starting_price_display=cents_to_display(a.starting_price),
            current_bid_cents=a.current_bid,
            current_bid_display=(
                cents_to_display(a.current_bid) if a.current_bid is not None else None
            ),
            start_date=iso_or_none(a.start_date),
            end_date=a.end_date.isoformat(),
            created_by=a.created_by,
            winner_id=a.winner_id,
            created_at=a.created_at.isoformat(),
            updated_at=a.updated_at.isoformat(),
            items=[AuctionItemOut.from_domain(i) for i in a.items],
        )
