"""AuctionApplicationService — seller listings and browsing.

Reads run without an explicit transaction. create_auction and
update_status commit on success and roll back on any exception.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_auction.application.schemas import (
    AuctionDetail,
    AuctionListItem,
    AuctionListResponse,
    CreateAuctionRequest,
)
from src.am_auction.domain.models import NewAuction, NewAuctionItem
from src.am_auction.domain.repository import AuctionRepositoryProtocol
from src.am_auction.infrastructure.persistence import AuctionRepository
from src.am_common.datetime_utils import utc_now
from src.am_common.enums import AuctionStatus
from src.am_common.errors import (
    AuctionNotFoundError,
    InvalidAuctionError,
    InvalidStatusTransitionError,
    NotAuctionOwnerError,
)

logger = logging.getLogger(__name__)

_CREATABLE_STATUSES = {
    AuctionStatus.DRAFT.value,
    AuctionStatus.UPCOMING.value,
    AuctionStatus.ACTIVE.value,
}
# Sellers may only move auctions that have not started taking bids.
_EDITABLE_FROM = [AuctionStatus.DRAFT.value, AuctionStatus.UPCOMING.value]
_SELLER_TARGETS = {
    AuctionStatus.DRAFT.value,
    AuctionStatus.UPCOMING.value,
    AuctionStatus.ACTIVE.value,
    AuctionStatus.CANCELLED.value,
}


def _as_utc(dt: datetime) -> datetime:
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


class AuctionApplicationService:
    def __init__(self, repo: AuctionRepositoryProtocol | None = None) -> None:
        self._repo: AuctionRepositoryProtocol = repo or AuctionRepository()

    async def list_auctions(
        self, db: AsyncSession, category: str | None, limit: int
    ) -> AuctionListResponse:
        auctions = await self._repo.list_browseable(db, category, limit)
        return AuctionListResponse(items=[AuctionListItem.from_domain(a) for a in auctions])

    async def get_auction(self, db: AsyncSession, auction_id: str) -> AuctionDetail:
        auction = await self._repo.get_auction_by_id(db, auction_id)
        if auction is None:
            raise AuctionNotFoundError(auction_id)
        auction.items = await self._repo.list_items(db, auction_id)
        return AuctionDetail.from_domain(auction)

    async def create_auction(
        self, db: AsyncSession, seller_id: str, req: CreateAuctionRequest
    ) -> AuctionDetail:
        if req.status not in _CREATABLE_STATUSES:
            raise InvalidAuctionError(f"Cannot create an auction with status {req.status}")
        start_date = _as_utc(req.start_date) if req.start_date else utc_now()
        end_date = _as_utc(req.end_date)
        if end_date <= start_date:
            raise InvalidAuctionError("end_date must be after start_date")

        new = NewAuction(
            title=req.title,
            description=req.description,
            category=req.category,
            status=req.status,
            starting_price=req.starting_price_cents,
            start_date=start_date,
            end_date=end_date,
            created_by=seller_id,
            items=[
                NewAuctionItem(
                    title=item.title,
                    description=item.description,
                    starting_price=item.starting_price_cents,
                    position=position,
                )
                for position, item in enumerate(req.items)
            ],
        )
        try:
            auction = await self._repo.create_auction(db, new)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Auction created: id=%s seller=%s status=%s", auction.id, seller_id, auction.status)
        return AuctionDetail.from_domain(auction)

    async def update_status(
        self, db: AsyncSession, user_id: str, auction_id: str, target: str
    ) -> AuctionDetail:
        auction = await self._repo.get_auction_by_id(db, auction_id)
        if auction is None:
            raise AuctionNotFoundError(auction_id)
        if auction.created_by != user_id:
            raise NotAuctionOwnerError()
        if auction.status not in _EDITABLE_FROM or target not in _SELLER_TARGETS:
            raise InvalidStatusTransitionError(auction.status, target)

        try:
            updated = await self._repo.update_status(db, auction_id, _EDITABLE_FROM, target)
            if updated is None:
                # Status moved underneath us (e.g. published by the lifecycle job)
                raise InvalidStatusTransitionError(auction.status, target)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Auction status changed: id=%s %s -> %s", auction_id, auction.status, target
        )
        return AuctionDetail.from_domain(updated)
