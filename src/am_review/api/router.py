"""am_review REST endpoints.

POST /reviews            — create or update my review of another user
GET  /reviews/{user_id}  — reviews received by a user, newest first
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.am_common.database import get_db_session
from src.am_common.response import ApiResponse, success_response
from src.am_gateway.auth.dependencies import (
    CurrentUser,
    get_current_user,
    get_registered_user,
)
from src.am_review.application.schemas import UpsertReviewRequest
from src.am_review.application.service import ReviewApplicationService

router = APIRouter(prefix="/reviews", tags=["reviews"])

_service = ReviewApplicationService()


@router.post("", status_code=201)
async def upsert_review(
    body: UpsertReviewRequest,
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_registered_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.upsert_review(
        db, current_user.id, str(body.user_id), body.rating, body.comment
    )
    return success_response(result.model_dump(), request)


@router.get("/{user_id}")
async def list_reviews(
    user_id: uuid.UUID,
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    limit: int = Query(5, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> ApiResponse:
    result = await _service.list_reviews(db, str(user_id), limit, offset)
    return success_response(result.model_dump(), request)
