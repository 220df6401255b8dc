"""OpenAI chat-completions client for description generation.

The AsyncOpenAI client is created on first use from settings.
"""

import logging
import time
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from config.settings import settings
from src.am_common.errors import DescriptionGenerationError

logger = logging.getLogger(__name__)

MAX_TOKENS = 200


class OpenAIDescriber:
    def __init__(self, client: AsyncOpenAI | None = None, model: str | None = None) -> None:
        self._client = client
        self._model = model or settings.OPENAI_MODEL

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not settings.OPENAI_API_KEY:
                logger.error("OPENAI_API_KEY is not configured")
                raise DescriptionGenerationError()
            self._client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
        return self._client

    async def complete(self, messages: list[dict[str, Any]]) -> str:
        client = self._get_client()
        start = time.perf_counter()
        try:
            response = await client.chat.completions.create(
                model=self._model,
                messages=messages,  # type: ignore[arg-type]
                max_tokens=MAX_TOKENS,
            )
        except OpenAIError as exc:
            logger.error("OpenAI request failed: %s", exc)
            raise DescriptionGenerationError() from exc

        latency_ms = (time.perf_counter() - start) * 1000
        tokens = response.usage.total_tokens if response.usage else 0
        logger.info("Description generated: model=%s tokens=%d (%.0fms)", self._model, tokens, latency_ms)
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
