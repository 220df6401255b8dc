"""am_payment REST endpoints.

POST /payments/setup-intent    — client secret for saving a card off-session
POST /payments/attach-default  — make a saved card the default
POST /payments/webhook         — processor events (signature-verified, no user auth)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.am_common.database import get_db_session
from src.am_common.response import ApiResponse, success_response
from src.am_gateway.auth.dependencies import CurrentUser, get_registered_user
from src.am_payment.application.schemas import AttachDefaultRequest
from src.am_payment.application.service import PaymentApplicationService

router = APIRouter(prefix="/payments", tags=["payments"])

_service = PaymentApplicationService()


@router.post("/setup-intent")
async def create_setup_intent(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_registered_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.create_setup_intent(db, current_user.id, current_user.email)
    return success_response(result.model_dump(), request)


@router.post("/attach-default")
async def attach_default(
    body: AttachDefaultRequest,
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_registered_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.attach_default(db, current_user.id, body.payment_method_id)
    return success_response(result.model_dump(), request)


@router.post("/webhook")
async def processor_webhook(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    stripe_signature: Annotated[str | None, Header(alias="Stripe-Signature")] = None,
) -> dict[str, object]:
    payload = await request.body()
    return await _service.handle_webhook(db, payload, stripe_signature)
