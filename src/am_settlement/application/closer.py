"""AuctionCloser — the auction lifecycle pass.

Each expired auction is closed in its own transaction:
  1. lock the row (FOR UPDATE SKIP LOCKED), re-checking status = 'active'
  2. load bids placed at or before end_date
  3. pick the winner (select_winning_bid)
  4. one UPDATE: status='ended', winner_id, current_bid
A failure rolls back that auction only and is reported in its result.
"""

import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_common.datetime_utils import utc_now
from src.am_common.enums import CloseOutcome
from src.am_settlement.domain.models import CloseResult
from src.am_settlement.domain.repository import SettlementRepositoryProtocol
from src.am_settlement.domain.winner import select_winning_bid
from src.am_settlement.infrastructure.persistence import SettlementRepository

logger = logging.getLogger(__name__)


class AuctionCloser:
    def __init__(self, repo: SettlementRepositoryProtocol | None = None) -> None:
        self._repo: SettlementRepositoryProtocol = repo or SettlementRepository()

    async def publish_due_auctions(
        self, db: AsyncSession, now: datetime | None = None
    ) -> list[str]:
        """Move upcoming auctions whose start_date has passed to active."""
        now = now or utc_now()
        try:
            published = await self._repo.publish_due_auctions(db, now)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        if published:
            logger.info("Published %d auction(s): %s", len(published), published)
        return published

    async def close_expired_auctions(
        self, db: AsyncSession, now: datetime | None = None
    ) -> list[CloseResult]:
        now = now or utc_now()
        auction_ids = await self._repo.list_expired_auction_ids(db, now)
        await db.commit()

        results = [await self._close_one(db, auction_id) for auction_id in auction_ids]
        logger.info(
            "Close-out pass: %d candidate(s), %d ended, %d error(s)",
            len(auction_ids),
            sum(1 for r in results if r.status in (CloseOutcome.ENDED, CloseOutcome.ENDED_NO_BIDS)),
            sum(1 for r in results if r.status == CloseOutcome.ERROR),
        )
        return results

    async def _close_one(self, db: AsyncSession, auction_id: str) -> CloseResult:
        try:
            auction = await self._repo.lock_active_auction(db, auction_id)
            if auction is None:
                # Already ended, or held by a concurrent run.
                await db.rollback()
                return CloseResult(auction_id=auction_id, status=CloseOutcome.SKIPPED.value)

            bids = await self._repo.list_bids_until(db, auction_id, auction.end_date)
            winner = select_winning_bid(bids)
            if winner is None:
                await self._repo.mark_ended(db, auction_id, None, None)
                await db.commit()
                logger.info("Auction %s ended with no bids", auction_id)
                return CloseResult(auction_id=auction_id, status=CloseOutcome.ENDED_NO_BIDS.value)

            await self._repo.mark_ended(db, auction_id, winner.user_id, winner.bid_amount)
            await db.commit()
        except Exception as exc:
            await db.rollback()
            logger.exception("Failed to close auction %s", auction_id)
            return CloseResult(
                auction_id=auction_id, status=CloseOutcome.ERROR.value, error=str(exc)
            )

        logger.info(
            "Auction %s ended: winner=%s amount=%d", auction_id, winner.user_id, winner.bid_amount
        )
        return CloseResult(
            auction_id=auction_id,
            status=CloseOutcome.ENDED.value,
            winner_id=winner.user_id,
            winning_bid=winner.bid_amount,
        )
