"""Settlement endpoints, called by the external scheduler.

POST /settlement/end-auctions     — publish due auctions, close expired ones
POST /settlement/process-winners  — charge winners of ended auctions

Both require ``Authorization: Bearer <CRON_SECRET>``.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.am_common.database import get_db_session
from src.am_common.response import ApiResponse, success_response
from src.am_gateway.auth.dependencies import require_cron_secret
from src.am_settlement.application.service import SettlementService

router = APIRouter(
    prefix="/settlement",
    tags=["settlement"],
    dependencies=[Depends(require_cron_secret)],
)

_service = SettlementService()


@router.post("/end-auctions")
async def end_auctions(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.end_auctions(db)
    return success_response(result.model_dump(), request, message="Auction close-out complete")


@router.post("/process-winners")
async def process_winners(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.process_winners(db)
    return success_response(result.model_dump(), request, message="Winner processing complete")
