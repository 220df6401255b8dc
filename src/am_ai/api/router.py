"""AI endpoints.

POST /ai/generate-description — rate limited per user
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from config.settings import settings
from src.am_ai.application.schemas import GenerateDescriptionRequest
from src.am_ai.application.service import DescriptionService
from src.am_common.response import ApiResponse, success_response
from src.am_gateway.auth.dependencies import CurrentUser, get_current_user
from src.am_gateway.middleware.rate_limit import rate_limit

router = APIRouter(prefix="/ai", tags=["ai"])

_service = DescriptionService()


@router.post(
    "/generate-description",
    dependencies=[Depends(rate_limit("ai", settings.AI_RATE_LIMIT_PER_MINUTE))],
)
async def generate_description(
    body: GenerateDescriptionRequest,
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ApiResponse:
    result = await _service.generate(body.base64_image, body.title)
    return success_response(result.model_dump(), request)
