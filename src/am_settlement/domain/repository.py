"""Repository Protocol for the close-out and charge passes."""

from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_settlement.domain.models import BidCandidate, ChargeCandidate, ClosingAuction


class SettlementRepositoryProtocol(Protocol):
    async def publish_due_auctions(self, db: AsyncSession, now: datetime) -> list[str]: ...

    async def list_expired_auction_ids(self, db: AsyncSession, now: datetime) -> list[str]: ...

    async def lock_active_auction(
        self, db: AsyncSession, auction_id: str
    ) -> ClosingAuction | None: ...

    async def list_bids_until(
        self, db: AsyncSession, auction_id: str, end_date: datetime
    ) -> list[BidCandidate]: ...

    async def mark_ended(
        self,
        db: AsyncSession,
        auction_id: str,
        winner_id: str | None,
        winning_bid: int | None,
    ) -> None: ...

    async def list_charge_candidates(self, db: AsyncSession) -> list[ChargeCandidate]: ...

    async def lock_charge_candidate(self, db: AsyncSession, auction_id: str) -> bool: ...
