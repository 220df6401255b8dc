"""Bid placement, my-bids aggregation and watchlist management.

Writes commit on success and roll back on any exception. The auction row is
locked FOR UPDATE while a bid is validated so two concurrent bids cannot both
pass the minimum-increment check against the same current_bid.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.am_bidding.application.schemas import (
    BidOut,
    MyBidsResponse,
    WatchlistEntryOut,
    WonAuctionOut,
)
from src.am_bidding.domain.aggregator import classify_my_bids, minimum_next_bid
from src.am_bidding.domain.repository import (
    BidRepositoryProtocol,
    WatchlistRepositoryProtocol,
)
from src.am_bidding.infrastructure.persistence import BidRepository, WatchlistRepository
from src.am_common.database import is_unique_violation
from src.am_common.datetime_utils import utc_now
from src.am_common.enums import AuctionStatus
from src.am_common.errors import (
    AlreadyInWatchlistError,
    AuctionNotActiveError,
    AuctionNotFoundError,
    BidTooLowError,
    NoPaymentMethodError,
    WatchlistEntryNotFoundError,
    WatchlistWriteError,
)

logger = logging.getLogger(__name__)


class BidApplicationService:
    def __init__(self, repo: BidRepositoryProtocol | None = None) -> None:
        self._repo: BidRepositoryProtocol = repo or BidRepository()

    async def place_bid(
        self, db: AsyncSession, user_id: str, auction_id: str, amount: int
    ) -> BidOut:
        try:
            payment_method_id = await self._repo.get_payment_method_id(db, user_id)
            if not payment_method_id:
                raise NoPaymentMethodError()

            auction = await self._repo.lock_auction(db, auction_id)
            if auction is None:
                raise AuctionNotFoundError(auction_id)
            if auction.status != AuctionStatus.ACTIVE or auction.end_date <= utc_now():
                raise AuctionNotActiveError(auction_id)

            min_bid = minimum_next_bid(
                auction.current_bid, auction.starting_price, settings.MIN_BID_INCREMENT_CENTS
            )
            if amount < min_bid:
                raise BidTooLowError(min_bid)

            bid = await self._repo.insert_bid(db, auction_id, user_id, amount)
            await self._repo.set_current_bid(db, auction_id, amount)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Bid placed: auction=%s user=%s amount=%d", auction_id, user_id, amount)
        return BidOut.from_domain(bid)

    async def my_bids(self, db: AsyncSession, user_id: str) -> MyBidsResponse:
        rows = await self._repo.list_my_bid_rows(db, user_id)
        return MyBidsResponse.from_domain(classify_my_bids(rows))

    async def won_auctions(self, db: AsyncSession, user_id: str) -> list[WonAuctionOut]:
        won = await self._repo.list_won_auctions(db, user_id)
        return [WonAuctionOut.from_domain(w) for w in won]


class WatchlistApplicationService:
    def __init__(self, repo: WatchlistRepositoryProtocol | None = None) -> None:
        self._repo: WatchlistRepositoryProtocol = repo or WatchlistRepository()

    async def add(self, db: AsyncSession, user_id: str, target_id: str) -> dict[str, object]:
        target = await self._repo.resolve_target(db, target_id)
        if target is None:
            raise AuctionNotFoundError(target_id)
        try:
            entry_id = await self._repo.insert_entry(db, user_id, target)
            await db.commit()
        except IntegrityError as exc:
            await db.rollback()
            if is_unique_violation(exc):
                raise AlreadyInWatchlistError() from None
            logger.error("Watchlist insert failed: user=%s target=%s: %s", user_id, target_id, exc)
            raise WatchlistWriteError() from exc
        except SQLAlchemyError as exc:
            await db.rollback()
            logger.error("Watchlist insert failed: user=%s target=%s: %s", user_id, target_id, exc)
            raise WatchlistWriteError() from exc
        return {
            "id": entry_id,
            "auction_id": target.auction_id,
            "auction_item_id": target.auction_item_id,
        }

    async def remove(self, db: AsyncSession, user_id: str, target_id: str) -> None:
        """Delete the item-scoped entry, else the auction-scoped one."""
        try:
            deleted = await self._repo.delete_item_entry(db, user_id, target_id)
            if deleted == 0:
                deleted = await self._repo.delete_auction_entry(db, user_id, target_id)
            if deleted == 0:
                raise WatchlistEntryNotFoundError(target_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

    async def list_entries(self, db: AsyncSession, user_id: str) -> list[WatchlistEntryOut]:
        entries = await self._repo.list_entries(db, user_id)
        return [WatchlistEntryOut.from_domain(e) for e in entries]

    async def is_in_watchlist(self, db: AsyncSession, user_id: str, target_id: str) -> bool:
        return await self._repo.exists(db, user_id, target_id)
