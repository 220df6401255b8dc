"""Pydantic schemas for bids, my-bids and the watchlist."""

import uuid

from pydantic import BaseModel, Field

from src.am_bidding.domain.models import Bid, MyBid, MyBidsSummary, WatchlistEntry, WonAuction
from src.am_common.cents import cents_to_display
from src.am_common.datetime_utils import iso_or_none


class PlaceBidRequest(BaseModel):
    bid_amount_cents: int = Field(..., gt=0)


class BidOut(BaseModel):
    id: int
    auction_id: str
    bid_amount_cents: int
    bid_amount_display: str
    created_at: str

    @classmethod
    def from_domain(cls, b: Bid) -> "BidOut":
        return cls(
            id=b.id,
            auction_id=b.auction_id,
            bid_amount_cents=b.bid_amount,
            bid_amount_display=cents_to_display(b.bid_amount),
            created_at=b.created_at.isoformat(),
        )


class MyBidOut(BaseModel):
    auction_id: str
    title: str
    my_bid_cents: int
    current_bid_cents: int | None
    starting_price_cents: int
    end_date: str
    auction_status: str

    @classmethod
    def from_domain(cls, b: MyBid) -> "MyBidOut":
        return cls(
            auction_id=b.auction_id,
            title=b.title,
            my_bid_cents=b.my_bid,
            current_bid_cents=b.current_bid,
            starting_price_cents=b.starting_price,
            end_date=b.end_date.isoformat(),
            auction_status=b.status,
        )


class MyBidsResponse(BaseModel):
    active: list[MyBidOut]
    outbid: list[MyBidOut]

    @classmethod
    def from_domain(cls, summary: MyBidsSummary) -> "MyBidsResponse":
        return cls(
            active=[MyBidOut.from_domain(b) for b in summary.active],
            outbid=[MyBidOut.from_domain(b) for b in summary.outbid],
        )


class WonAuctionOut(BaseModel):
    auction_id: str
    title: str
    winning_bid_cents: int | None
    end_date: str
    payment_status: str | None

    @classmethod
    def from_domain(cls, w: WonAuction) -> "WonAuctionOut":
        return cls(
            auction_id=w.auction_id,
            title=w.title,
            winning_bid_cents=w.winning_bid,
            end_date=w.end_date.isoformat(),
            payment_status=w.payment_status,
        )


class AddWatchlistRequest(BaseModel):
    target_id: uuid.UUID


class WatchlistEntryOut(BaseModel):
    id: int
    auction_id: str
    auction_item_id: str | None
    title: str
    auction_status: str
    current_bid_cents: int | None
    starting_price_cents: int
    end_date: str
    created_at: str | None

    @classmethod
    def from_domain(cls, e: WatchlistEntry) -> "WatchlistEntryOut":
        return cls(
            id=e.id,
            auction_id=e.auction_id,
            auction_item_id=e.auction_item_id,
            title=e.title,
            auction_status=e.status,
            current_bid_cents=e.current_bid,
            starting_price_cents=e.starting_price,
            end_date=e.end_date.isoformat(),
            created_at=iso_or_none(e.created_at),
        )
