"""am_bidding REST endpoints.

POST   /auctions/{auction_id}/bids — place a bid
GET    /me/bids                    — my bids split into active / outbid
GET    /me/won                     — ended auctions I won, with payment status
GET    /watchlist                  — my watchlist
POST   /watchlist                  — watch an auction or a single lot
GET    /watchlist/{target_id}      — is the target in my watchlist
DELETE /watchlist/{target_id}      — unwatch
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.am_bidding.application.schemas import AddWatchlistRequest, PlaceBidRequest
from src.am_bidding.application.service import (
    BidApplicationService,
    WatchlistApplicationService,
)
from src.am_common.database import get_db_session
from src.am_common.response import ApiResponse, success_response
from src.am_gateway.auth.dependencies import (
    CurrentUser,
    get_current_user,
    get_registered_user,
)

router = APIRouter(tags=["bids"])
watchlist_router = APIRouter(prefix="/watchlist", tags=["watchlist"])

_bids = BidApplicationService()
_watchlist = WatchlistApplicationService()


@router.post("/auctions/{auction_id}/bids", status_code=201)
async def place_bid(
    auction_id: uuid.UUID,
    body: PlaceBidRequest,
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_registered_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _bids.place_bid(db, current_user.id, str(auction_id), body.bid_amount_cents)
    return success_response(result.model_dump(), request)


@router.get("/me/bids")
async def my_bids(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _bids.my_bids(db, current_user.id)
    return success_response(result.model_dump(), request)


@router.get("/me/won")
async def won_auctions(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _bids.won_auctions(db, current_user.id)
    return success_response({"items": [w.model_dump() for w in result]}, request)


@watchlist_router.get("")
async def list_watchlist(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _watchlist.list_entries(db, current_user.id)
    return success_response({"items": [e.model_dump() for e in result]}, request)


@watchlist_router.post("", status_code=201)
async def add_to_watchlist(
    body: AddWatchlistRequest,
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_registered_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _watchlist.add(db, current_user.id, str(body.target_id))
    return success_response(result, request)


@watchlist_router.get("/{target_id}")
async def check_watchlist(
    target_id: uuid.UUID,
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    watching = await _watchlist.is_in_watchlist(db, current_user.id, str(target_id))
    return success_response({"in_watchlist": watching}, request)


@watchlist_router.delete("/{target_id}")
async def remove_from_watchlist(
    target_id: uuid.UUID,
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    await _watchlist.remove(db, current_user.id, str(target_id))
    return success_response({"removed": True}, request)
