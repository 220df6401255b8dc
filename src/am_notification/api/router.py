"""am_notification REST endpoints.

GET  /notifications                 — newest first, with unread count
GET  /notifications/unread-count
POST /notifications/{id}/read       — only the recipient may mark it
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.am_common.database import get_db_session
from src.am_common.response import ApiResponse, success_response
from src.am_gateway.auth.dependencies import CurrentUser, get_current_user
from src.am_notification.application.service import NotificationApplicationService

router = APIRouter(prefix="/notifications", tags=["notifications"])

_service = NotificationApplicationService()


@router.get("")
async def list_notifications(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    limit: int = Query(50, ge=1, le=200),
) -> ApiResponse:
    result = await _service.list_notifications(db, current_user.id, limit)
    return success_response(result.model_dump(), request)


@router.get("/unread-count")
async def unread_count(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    count = await _service.unread_count(db, current_user.id)
    return success_response({"unread_count": count}, request)


@router.post("/{notification_id}/read")
async def mark_read(
    notification_id: int,
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    await _service.mark_read(db, current_user.id, notification_id)
    return success_response({"id": notification_id, "read": True}, request)
