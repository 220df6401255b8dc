"""AuctionRepository — concrete implementation of AuctionRepositoryProtocol.

All queries use raw text() SQL (no ORM).
asyncpg NULL parameter pattern: CAST(:param AS TYPE) IS NULL required for None values.

Transaction ownership: the CALLER (application service) commits or rolls back.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.am_auction.domain.models import Auction, AuctionItem, NewAuction

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_AUCTION_COLUMNS = """
    id, title, description, category, status,
    starting_price, current_bid, start_date, end_date,
    created_by, winner_id, created_at, updated_at
"""

_GET_AUCTION_SQL = text(f"""
    SELECT {_AUCTION_COLUMNS}
    FROM auctions
    WHERE id = :auction_id
""")

_LIST_BROWSEABLE_SQL = text(f"""
    SELECT {_AUCTION_COLUMNS}
    FROM auctions
    WHERE status IN ('active', 'upcoming')
      AND (CAST(:category AS TEXT) IS NULL OR category = CAST(:category AS TEXT))
    ORDER BY end_date ASC, id ASC
    LIMIT :limit
""")

_LIST_ITEMS_SQL = text("""
    SELECT id, auction_id, title, description, starting_price, position
    FROM auction_items
    WHERE auction_id = :auction_id
    ORDER BY position ASC, id ASC
""")

_INSERT_AUCTION_SQL = text(f"""
    INSERT INTO auctions
        (title, description, category, status, starting_price,
         start_date, end_date, created_by)
    VALUES
        (:title, :description, :category, :status, :starting_price,
         :start_date, :end_date, :created_by)
    RETURNING {_AUCTION_COLUMNS}
""")

_INSERT_ITEM_SQL = text("""
    INSERT INTO auction_items
        (auction_id, title, description, starting_price, position)
    VALUES
        (:auction_id, :title, :description, :starting_price, :position)
    RETURNING id, auction_id, title, description, starting_price, position
""")

# Guarded transition: 0 rows means the auction left from_statuses concurrently.
_UPDATE_STATUS_SQL = text(f"""
    UPDATE auctions
    SET status = :to_status,
        updated_at = NOW()
    WHERE id = :auction_id
      AND status = ANY(:from_statuses)
    RETURNING {_AUCTION_COLUMNS}
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_auction(row: object) -> Auction:
    return Auction(
        id=str(row.id),  # type: ignore[attr-defined]
        title=row.title,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        category=row.category,  # type: ignore[attr-defined]
        status=row.status,  # type: ignore[attr-defined]
        starting_price=row.starting_price,  # type: ignore[attr-defined]
        current_bid=row.current_bid,  # type: ignore[attr-defined]
        start_date=row.start_date,  # type: ignore[attr-defined]
        end_date=row.end_date,  # type: ignore[attr-defined]
        created_by=str(row.created_by),  # type: ignore[attr-defined]
        winner_id=str(row.winner_id) if row.winner_id else None,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


def _row_to_item(row: object) -> AuctionItem:
    return AuctionItem(
        id=str(row.id),  # type: ignore[attr-defined]
        auction_id=str(row.auction_id),  # type: ignore[attr-defined]
        title=row.title,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        starting_price=row.starting_price,  # type: ignore[attr-defined]
        position=row.position,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class AuctionRepository:
    async def list_browseable(
        self, db: AsyncSession, category: str | None, limit: int
    ) -> list[Auction]:
        result = await db.execute(
            _LIST_BROWSEABLE_SQL, {"category": category, "limit": limit}
        )
        return [_row_to_auction(row) for row in result.fetchall()]

    async def get_auction_by_id(
        self, db: AsyncSession, auction_id: str
    ) -> Auction | None:
        result = await db.execute(_GET_AUCTION_SQL, {"auction_id": auction_id})
        row = result.fetchone()
        return _row_to_auction(row) if row else None

    async def list_items(self, db: AsyncSession, auction_id: str) -> list[AuctionItem]:
        result = await db.execute(_LIST_ITEMS_SQL, {"auction_id": auction_id})
        return [_row_to_item(row) for row in result.fetchall()]

    async def create_auction(self, db: AsyncSession, new: NewAuction) -> Auction:
        result = await db.execute(
            _INSERT_AUCTION_SQL,
            {
                "title": new.title,
                "description": new.description,
                "category": new.category,
                "status": new.status,
                "starting_price": new.starting_price,
                "start_date": new.start_date,
                "end_date": new.end_date,
                "created_by": new.created_by,
            },
        )
        auction = _row_to_auction(result.fetchone())
        for item in new.items:
            item_result = await db.execute(
                _INSERT_ITEM_SQL,
                {
                    "auction_id": auction.id,
                    "title": item.title,
                    "description": item.description,
                    "starting_price": item.starting_price,
                    "position": item.position,
                },
            )
            auction.items.append(_row_to_item(item_result.fetchone()))
        return auction

    async def update_status(
        self,
        db: AsyncSession,
        auction_id: str,
        from_statuses: list[str],
        to_status: str,
    ) -> Auction | None:
        result = await db.execute(
            _UPDATE_STATUS_SQL,
            {
                "auction_id": auction_id,
                "from_statuses": from_statuses,
                "to_status": to_status,
            },
        )
        row = result.fetchone()
        return _row_to_auction(row) if row else None
