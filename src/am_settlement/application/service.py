"""SettlementService — entry points for the scheduler-driven passes."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_settlement.application.charger import PaymentCharger
from src.am_settlement.application.closer import AuctionCloser
from src.am_settlement.application.schemas import (
    ChargeResultOut,
    CloseResultOut,
    EndAuctionsResponse,
    ProcessWinnersResponse,
)


class SettlementService:
    def __init__(
        self, closer: AuctionCloser | None = None, charger: PaymentCharger | None = None
    ) -> None:
        self._closer = closer or AuctionCloser()
        self._charger = charger or PaymentCharger()

    async def end_auctions(self, db: AsyncSession) -> EndAuctionsResponse:
        published = await self._closer.publish_due_auctions(db)
        results = await self._closer.close_expired_auctions(db)
        return EndAuctionsResponse(
            published=published,
            processed=len(results),
            results=[CloseResultOut.from_domain(r) for r in results],
        )

    async def process_winners(self, db: AsyncSession) -> ProcessWinnersResponse:
        results = await self._charger.charge_winners(db)
        return ProcessWinnersResponse(
            processed=len(results),
            results=[ChargeResultOut.from_domain(r) for r in results],
        )
