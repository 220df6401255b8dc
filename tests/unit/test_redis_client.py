"""Unit tests for the Redis counter helpers."""

from unittest.mock import AsyncMock, MagicMock, patch

from src.am_common import redis_client


def _client(executed: list) -> MagicMock:
    pipe = MagicMock()
    pipe.__aenter__.return_value = pipe
    pipe.execute = AsyncMock(return_value=executed)
    client = MagicMock()
    client.pipeline.return_value = pipe
    return client


async def test_count_in_window_sets_expiry_in_same_transaction() -> None:
    client = _client([3, False])
    with patch.object(redis_client, "get_redis", AsyncMock(return_value=client)):
        count = await redis_client.count_in_window("ratelimit:ai:u-1:1", 60)

    assert count == 3
    client.pipeline.assert_called_once_with(transaction=True)
    pipe = client.pipeline.return_value
    pipe.incr.assert_called_once_with("ratelimit:ai:u-1:1")
    pipe.expire.assert_called_once_with("ratelimit:ai:u-1:1", 60, nx=True)


async def test_ping_redis() -> None:
    client = AsyncMock()
    with patch.object(redis_client, "get_redis", AsyncMock(return_value=client)):
        await redis_client.ping_redis()
    client.ping.assert_awaited_once()


async def test_close_redis_resets_client() -> None:
    client = AsyncMock()
    with patch.object(redis_client, "_client", client):
        await redis_client.close_redis()
        assert redis_client._client is None
    client.aclose.assert_awaited_once()
