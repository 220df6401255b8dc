"""SettlementRepository — raw text() SQL for auction close-out and charging.

Transaction ownership: the CALLER commits or rolls back, once per auction.
"""

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.am_settlement.domain.models import BidCandidate, ChargeCandidate, ClosingAuction

_PUBLISH_DUE_SQL = text("""
    UPDATE auctions
    SET status = 'active', updated_at = NOW()
    WHERE status = 'upcoming'
      AND start_date <= :now
    RETURNING id
""")

_LIST_EXPIRED_SQL = text("""
    SELECT id FROM auctions
    WHERE status = 'active'
      AND end_date <= :now
    ORDER BY end_date ASC, id ASC
""")

# SKIP LOCKED: a concurrent close-out run holding the row makes this one skip it.
# The status predicate is re-checked under the lock.
_LOCK_ACTIVE_SQL = text("""
    SELECT id, title, end_date
    FROM auctions
    WHERE id = :auction_id
      AND status = 'active'
    FOR UPDATE SKIP LOCKED
""")

_LIST_BIDS_UNTIL_SQL = text("""
    SELECT id, user_id, bid_amount, created_at
    FROM bids
    WHERE auction_id = :auction_id
      AND created_at <= :end_date
""")

_MARK_ENDED_SQL = text("""
    UPDATE auctions
    SET status = 'ended',
        winner_id = CAST(:winner_id AS UUID),
        current_bid = COALESCE(CAST(:winning_bid AS BIGINT), current_bid),
        updated_at = NOW()
    WHERE id = :auction_id
      AND status = 'active'
""")

_LIST_CHARGE_CANDIDATES_SQL = text("""
    SELECT a.id, a.title, a.winner_id, a.current_bid
    FROM auctions a
    WHERE a.status = 'ended'
      AND a.winner_id IS NOT NULL
      AND NOT EXISTS (SELECT 1 FROM payments p WHERE p.auction_id = a.id)
    ORDER BY a.end_date ASC, a.id ASC
""")

# Locked and re-checked per auction: a concurrent charge run either skips the
# held row or, once the other run commits, sees its payment row.
_LOCK_CHARGE_CANDIDATE_SQL = text("""
    SELECT a.id
    FROM auctions a
    WHERE a.id = :auction_id
      AND a.status = 'ended'
      AND a.winner_id IS NOT NULL
      AND NOT EXISTS (SELECT 1 FROM payments p WHERE p.auction_id = a.id)
    FOR UPDATE OF a SKIP LOCKED
""")


class SettlementRepository:
    async def publish_due_auctions(self, db: AsyncSession, now: datetime) -> list[str]:
        result = await db.execute(_PUBLISH_DUE_SQL, {"now": now})
        return [str(row.id) for row in result.fetchall()]

    async def list_expired_auction_ids(self, db: AsyncSession, now: datetime) -> list[str]:
        result = await db.execute(_LIST_EXPIRED_SQL, {"now": now})
        return [str(row.id) for row in result.fetchall()]

    async def lock_active_auction(
        self, db: AsyncSession, auction_id: str
    ) -> ClosingAuction | None:
        result = await db.execute(_LOCK_ACTIVE_SQL, {"auction_id": auction_id})
        row = result.fetchone()
        if row is None:
            return None
        return ClosingAuction(id=str(row.id), title=row.title, end_date=row.end_date)

    async def list_bids_until(
        self, db: AsyncSession, auction_id: str, end_date: datetime
    ) -> list[BidCandidate]:
        result = await db.execute(
            _LIST_BIDS_UNTIL_SQL, {"auction_id": auction_id, "end_date": end_date}
        )
        return [
            BidCandidate(
                id=row.id,
                user_id=str(row.user_id),
                bid_amount=row.bid_amount,
                created_at=row.created_at,
            )
            for row in result.fetchall()
        ]

    async def mark_ended(
        self,
        db: AsyncSession,
        auction_id: str,
        winner_id: str | None,
        winning_bid: int | None,
    ) -> None:
        await db.execute(
            _MARK_ENDED_SQL,
            {"auction_id": auction_id, "winner_id": winner_id, "winning_bid": winning_bid},
        )

    async def list_charge_candidates(self, db: AsyncSession) -> list[ChargeCandidate]:
        result = await db.execute(_LIST_CHARGE_CANDIDATES_SQL)
        return [
            ChargeCandidate(
                auction_id=str(row.id),
                title=row.title,
                winner_id=str(row.winner_id),
                winning_bid=row.current_bid,
            )
            for row in result.fetchall()
        ]

    async def lock_charge_candidate(self, db: AsyncSession, auction_id: str) -> bool:
        result = await db.execute(_LOCK_CHARGE_CANDIDATE_SQL, {"auction_id": auction_id})
        return result.fetchone() is not None
