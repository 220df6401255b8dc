"""Redis access for per-user request counters.

Only throttling state lives in Redis. Auctions, bids and payments are
PostgreSQL's; losing Redis loses nothing but the current window's counts.
"""

import logging

import redis.asyncio as aioredis

from config.settings import settings

logger = logging.getLogger(__name__)

_client: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis:
    """Return the process-wide client, connecting lazily on first use."""
    global _client  # noqa: PLW0603
    if _client is None:
        _client = aioredis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
            socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
        )
    return _client


async def ping_redis() -> None:
    """Startup check: raise if the counter store is unreachable."""
    client = await get_redis()
    await client.ping()
    logger.info("Redis counter store reachable")


async def count_in_window(key: str, window_seconds: int) -> int:
    """Increment ``key`` and return the new count.

    INCR and EXPIRE NX run in one MULTI/EXEC, so every counter carries an
    expiry no matter which request created it.
    """
    client = await get_redis()
    async with client.pipeline(transaction=True) as pipe:
        pipe.incr(key)
        pipe.expire(key, window_seconds, nx=True)
        count, _ = await pipe.execute()
    return int(count)


async def close_redis() -> None:
    global _client  # noqa: PLW0603
    if _client is not None:
        await _client.aclose()
        _client = None
