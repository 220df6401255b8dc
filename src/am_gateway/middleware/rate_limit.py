"""Redis fixed-window rate limiting.

Applied per user and endpoint group as a FastAPI dependency:

    @router.post("/generate", dependencies=[Depends(rate_limit("ai", 10))])

Key pattern: "ratelimit:{group}:{user_id}:{window}" where window is the
current minute. Counters expire with their window.
"""

import logging
import time
from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends

from src.am_common.errors import RateLimitError
from src.am_common.redis_client import count_in_window
from src.am_gateway.auth.dependencies import CurrentUser, get_current_user

logger = logging.getLogger(__name__)

_WINDOW_SECONDS = 60


async def hit(group: str, user_id: str, limit: int) -> None:
    """Count one request; raise RateLimitError once the window's limit is passed."""
    window = int(time.time()) // _WINDOW_SECONDS
    count = await count_in_window(f"ratelimit:{group}:{user_id}:{window}", _WINDOW_SECONDS)
    if count > limit:
        logger.info("Rate limit hit: group=%s user=%s count=%d", group, user_id, count)
        raise RateLimitError()


def rate_limit(group: str, limit: int) -> Callable[..., Awaitable[None]]:
    async def _dependency(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> None:
        await hit(group, current_user.id, limit)

    return _dependency
