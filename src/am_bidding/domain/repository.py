"""Repository Protocols for bids and watchlist entries."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_bidding.domain.models import (
    BiddableAuction,
    Bid,
    MyBidRow,
    WatchlistEntry,
    WatchTarget,
    WonAuction,
)


class BidRepositoryProtocol(Protocol):
    async def get_payment_method_id(self, db: AsyncSession, user_id: str) -> str | None: ...

    async def lock_auction(
        self, db: AsyncSession, auction_id: str
    ) -> BiddableAuction | None: ...

    async def insert_bid(
        self, db: AsyncSession, auction_id: str, user_id: str, amount: int
    ) -> Bid: ...

    async def set_current_bid(self, db: AsyncSession, auction_id: str, amount: int) -> None: ...

    async def list_my_bid_rows(self, db: AsyncSession, user_id: str) -> list[MyBidRow]: ...

    async def list_won_auctions(self, db: AsyncSession, user_id: str) -> list[WonAuction]: ...


class WatchlistRepositoryProtocol(Protocol):
    async def resolve_target(self, db: AsyncSession, target_id: str) -> WatchTarget | None: ...

    async def insert_entry(
        self, db: AsyncSession, user_id: str, target: WatchTarget
    ) -> int: ...

    async def delete_item_entry(self, db: AsyncSession, user_id: str, item_id: str) -> int: ...

    async def delete_auction_entry(
        self, db: AsyncSession, user_id: str, auction_id: str
    ) -> int: ...

    async def list_entries(self, db: AsyncSession, user_id: str) -> list[WatchlistEntry]: ...

    async def exists(self, db: AsyncSession, user_id: str, target_id: str) -> bool: ...
