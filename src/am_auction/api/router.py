"""am_auction REST endpoints.

GET   /auctions                     — browseable (active + upcoming) auctions
GET   /auctions/{auction_id}        — full detail with catalog items
POST  /auctions                     — create a listing
PATCH /auctions/{auction_id}/status — seller status change
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.am_auction.application.schemas import CreateAuctionRequest, UpdateStatusRequest
from src.am_auction.application.service import AuctionApplicationService
from src.am_common.database import get_db_session
from src.am_common.response import ApiResponse, success_response
from src.am_gateway.auth.dependencies import (
    CurrentUser,
    get_current_user,
    get_registered_user,
)

router = APIRouter(prefix="/auctions", tags=["auctions"])

_service = AuctionApplicationService()


@router.get("")
async def list_auctions(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    category: str | None = Query(None),
    limit: int = Query(50, ge=1, le=200),
) -> ApiResponse:
    result = await _service.list_auctions(db, category, limit)
    return success_response(result.model_dump(), request)


@router.get("/{auction_id}")
async def get_auction(
    auction_id: uuid.UUID,
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_auction(db, str(auction_id))
    return success_response(result.model_dump(), request)


@router.post("", status_code=201)
async def create_auction(
    body: CreateAuctionRequest,
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_registered_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.create_auction(db, current_user.id, body)
    return success_response(result.model_dump(), request)


@router.patch("/{auction_id}/status")
async def update_auction_status(
    auction_id: uuid.UUID,
    body: UpdateStatusRequest,
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_registered_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.update_status(db, current_user.id, str(auction_id), body.status)
    return success_response(result.model_dump(), request)
