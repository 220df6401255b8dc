"""DescriptionService — turn an image and/or title into listing copy."""

from src.am_ai.application.schemas import GenerateDescriptionResponse
from src.am_ai.domain.prompt import build_messages, strip_data_url
from src.am_ai.infrastructure.openai_client import OpenAIDescriber
from src.am_common.errors import MissingDescriptionInputError


class DescriptionService:
    def __init__(self, describer: OpenAIDescriber | None = None) -> None:
        self._describer = describer or OpenAIDescriber()

    async def generate(
        self, base64_image: str | None, title: str | None
    ) -> GenerateDescriptionResponse:
        image = strip_data_url(base64_image).strip() if base64_image else None
        title = title.strip() if title else None
        if not image and not title:
            raise MissingDescriptionInputError()
        text = await self._describer.complete(build_messages(image or None, title or None))
        return GenerateDescriptionResponse(description=text.strip())
