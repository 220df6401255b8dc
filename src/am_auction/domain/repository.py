# src/am_auction/domain/repository.py
"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_auction.domain.models import Auction, AuctionItem, NewAuction


class AuctionRepositoryProtocol(Protocol):
    async def list_browseable(
        self,
        db: AsyncSession,
        category: str | None,
        limit: int,
    ) -> list[Auction]: ...

    async def get_auction_by_id(
        self,
        db: AsyncSession,
        auction_id: str,
    ) -> Auction | None: ...

    async def list_items(
        self,
        db: AsyncSession,
        auction_id: str,
    ) -> list[AuctionItem]: ...

    async def create_auction(
        self,
        db: AsyncSession,
        new: NewAuction,
    ) -> Auction: ...

    async def update_status(
        self,
        db: AsyncSession,
        auction_id: str,
        from_statuses: list[str],
        to_status: str,
    ) -> Auction | None: ...
