"""Pydantic schemas for AI description generation."""

from pydantic import BaseModel, Field

# ~7.5 MB of image data once base64 encoded.
_MAX_IMAGE_CHARS = 10_000_000


class GenerateDescriptionRequest(BaseModel):
    base64_image: str | None = Field(None, max_length=_MAX_IMAGE_CHARS)
    title: str | None = Field(None, max_length=200)


class GenerateDescriptionResponse(BaseModel):
    description: str
