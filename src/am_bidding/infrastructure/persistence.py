"""BidRepository and WatchlistRepository — raw text() SQL, no ORM.

Transaction ownership: the CALLER (application service) commits or rolls back.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.am_bidding.domain.models import (
    BiddableAuction,
    Bid,
    MyBidRow,
    WatchlistEntry,
    WatchTarget,
    WonAuction,
)

# ---------------------------------------------------------------------------
# Bids
# ---------------------------------------------------------------------------

_GET_PAYMENT_METHOD_SQL = text("""
    SELECT payment_method_id FROM customers WHERE user_id = :user_id
""")

_LOCK_AUCTION_SQL = text("""
    SELECT id, status, starting_price, current_bid, end_date
    FROM auctions
    WHERE id = :auction_id
    FOR UPDATE
""")

_INSERT_BID_SQL = text("""
    INSERT INTO bids (auction_id, user_id, bid_amount)
    VALUES (:auction_id, :user_id, :bid_amount)
    RETURNING id, auction_id, user_id, bid_amount, created_at
""")

_SET_CURRENT_BID_SQL = text("""
    UPDATE auctions
    SET current_bid = :amount, updated_at = NOW()
    WHERE id = :auction_id
""")

_LIST_MY_BID_ROWS_SQL = text("""
    SELECT b.auction_id, a.title, b.bid_amount,
           a.current_bid, a.starting_price, a.end_date, a.status
    FROM bids b
    JOIN auctions a ON a.id = b.auction_id
    WHERE b.user_id = :user_id
    ORDER BY b.created_at DESC
""")

_LIST_WON_SQL = text("""
    SELECT a.id AS auction_id, a.title, a.current_bid, a.end_date,
           p.status AS payment_status
    FROM auctions a
    LEFT JOIN payments p ON p.auction_id = a.id
    WHERE a.winner_id = :user_id
      AND a.status = 'ended'
    ORDER BY a.end_date DESC
""")


class BidRepository:
    async def get_payment_method_id(self, db: AsyncSession, user_id: str) -> str | None:
        result = await db.execute(_GET_PAYMENT_METHOD_SQL, {"user_id": user_id})
        row = result.fetchone()
        return row.payment_method_id if row else None

    async def lock_auction(self, db: AsyncSession, auction_id: str) -> BiddableAuction | None:
        result = await db.execute(_LOCK_AUCTION_SQL, {"auction_id": auction_id})
        row = result.fetchone()
        if row is None:
            return None
        return BiddableAuction(
            id=str(row.id),
            status=row.status,
            starting_price=row.starting_price,
            current_bid=row.current_bid,
            end_date=row.end_date,
        )

    async def insert_bid(
        self, db: AsyncSession, auction_id: str, user_id: str, amount: int
    ) -> Bid:
        result = await db.execute(
            _INSERT_BID_SQL,
            {"auction_id": auction_id, "user_id": user_id, "bid_amount": amount},
        )
        row = result.fetchone()
        return Bid(
            id=row.id,  # type: ignore[union-attr]
            auction_id=str(row.auction_id),  # type: ignore[union-attr]
            user_id=str(row.user_id),  # type: ignore[union-attr]
            bid_amount=row.bid_amount,  # type: ignore[union-attr]
            created_at=row.created_at,  # type: ignore[union-attr]
        )

    async def set_current_bid(self, db: AsyncSession, auction_id: str, amount: int) -> None:
        await db.execute(_SET_CURRENT_BID_SQL, {"auction_id": auction_id, "amount": amount})

    async def list_my_bid_rows(self, db: AsyncSession, user_id: str) -> list[MyBidRow]:
        result = await db.execute(_LIST_MY_BID_ROWS_SQL, {"user_id": user_id})
        return [
            MyBidRow(
                auction_id=str(row.auction_id),
                title=row.title,
                bid_amount=row.bid_amount,
                current_bid=row.current_bid,
                starting_price=row.starting_price,
                end_date=row.end_date,
                status=row.status,
            )
            for row in result.fetchall()
        ]

    async def list_won_auctions(self, db: AsyncSession, user_id: str) -> list[WonAuction]:
        result = await db.execute(_LIST_WON_SQL, {"user_id": user_id})
        return [
            WonAuction(
                auction_id=str(row.auction_id),
                title=row.title,
                winning_bid=row.current_bid,
                end_date=row.end_date,
                payment_status=row.payment_status,
            )
            for row in result.fetchall()
        ]


# ---------------------------------------------------------------------------
# Watchlist
# ---------------------------------------------------------------------------

_RESOLVE_ITEM_SQL = text("""
    SELECT id, auction_id FROM auction_items WHERE id = :target_id
""")

_RESOLVE_AUCTION_SQL = text("""
    SELECT id FROM auctions WHERE id = :target_id
""")

_INSERT_ENTRY_SQL = text("""
    INSERT INTO watchlist (user_id, auction_id, auction_item_id)
    VALUES (:user_id, :auction_id, :auction_item_id)
    RETURNING id
""")

_DELETE_ITEM_ENTRY_SQL = text("""
    DELETE FROM watchlist
    WHERE user_id = :user_id AND auction_item_id = :item_id
""")

_DELETE_AUCTION_ENTRY_SQL = text("""
    DELETE FROM watchlist
    WHERE user_id = :user_id
      AND auction_id = :auction_id
      AND auction_item_id IS NULL
""")

_LIST_ENTRIES_SQL = text("""
    SELECT w.id, w.user_id, w.auction_id, w.auction_item_id, w.created_at,
           COALESCE(ai.title, a.title) AS title,
           COALESCE(ai.starting_price, a.starting_price) AS starting_price,
           a.status, a.current_bid, a.end_date
    FROM watchlist w
    JOIN auctions a ON a.id = w.auction_id
    LEFT JOIN auction_items ai ON ai.id = w.auction_item_id
    WHERE w.user_id = :user_id
    ORDER BY w.created_at DESC
""")

_EXISTS_SQL = text("""
    SELECT 1 FROM watchlist
    WHERE user_id = :user_id
      AND (auction_item_id = :target_id
           OR (auction_item_id IS NULL AND auction_id = :target_id))
    LIMIT 1
""")


class WatchlistRepository:
    async def resolve_target(self, db: AsyncSession, target_id: str) -> WatchTarget | None:
        """Resolve target_id as an auction item first, then as an auction."""
        item = (await db.execute(_RESOLVE_ITEM_SQL, {"target_id": target_id})).fetchone()
        if item is not None:
            return WatchTarget(auction_id=str(item.auction_id), auction_item_id=str(item.id))
        auction = (await db.execute(_RESOLVE_AUCTION_SQL, {"target_id": target_id})).fetchone()
        if auction is not None:
            return WatchTarget(auction_id=str(auction.id), auction_item_id=None)
        return None

    async def insert_entry(self, db: AsyncSession, user_id: str, target: WatchTarget) -> int:
        result = await db.execute(
            _INSERT_ENTRY_SQL,
            {
                "user_id": user_id,
                "auction_id": target.auction_id,
                "auction_item_id": target.auction_item_id,
            },
        )
        return result.scalar_one()

    async def delete_item_entry(self, db: AsyncSession, user_id: str, item_id: str) -> int:
        result = await db.execute(_DELETE_ITEM_ENTRY_SQL, {"user_id": user_id, "item_id": item_id})
        return result.rowcount

    async def delete_auction_entry(
        self, db: AsyncSession, user_id: str, auction_id: str
    ) -> int:
        result = await db.execute(
            _DELETE_AUCTION_ENTRY_SQL, {"user_id": user_id, "auction_id": auction_id}
        )
        return result.rowcount

    async def list_entries(self, db: AsyncSession, user_id: str) -> list[WatchlistEntry]:
        result = await db.execute(_LIST_ENTRIES_SQL, {"user_id": user_id})
        return [
            WatchlistEntry(
                id=row.id,
                user_id=str(row.user_id),
                auction_id=str(row.auction_id),
                auction_item_id=str(row.auction_item_id) if row.auction_item_id else None,
                title=row.title,
                status=row.status,
                current_bid=row.current_bid,
                starting_price=row.starting_price,
                end_date=row.end_date,
                created_at=row.created_at,
            )
            for row in result.fetchall()
        ]

    async def exists(self, db: AsyncSession, user_id: str, target_id: str) -> bool:
        result = await db.execute(_EXISTS_SQL, {"user_id": user_id, "target_id": target_id})
        return result.fetchone() is not None
