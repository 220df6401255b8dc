"""Prompt construction for auction description generation — no I/O."""

from typing import Any

_DATA_URL_MARKER = "base64,"


def strip_data_url(image: str) -> str:
    """Drop a ``data:<mime>;base64,`` prefix, leaving the raw base64 payload."""
    if _DATA_URL_MARKER in image:
        return image.split(_DATA_URL_MARKER, 1)[1]
    return image


def system_prompt(has_image: bool) -> str:
    lines = [
        "You are an expert e-commerce product description writer for auction listings. "
        "Create compelling, detailed descriptions that:",
        "- Highlight key features, materials, colors, and condition"
        + (" visible in the image" if has_image else ""),
        "- Use persuasive language that encourages bidding",
        "- Stay between 50-100 words",
        "- Focus on what makes the item valuable and desirable",
        "- Be specific about what you see in the image"
        if has_image
        else "- Use creative language to make the item appealing",
    ]
    return "\n".join(lines)


def user_content(image_b64: str | None, title: str | None) -> list[dict[str, Any]]:
    """Multimodal user message parts: one text instruction plus the image, if any."""
    if title and image_b64:
        instruction = (
            f'Generate a compelling auction description for this item titled: "{title}". '
            "Analyze the image and describe what makes this item special and worth bidding on."
        )
    elif title:
        instruction = (
            f'Generate a compelling auction description for an item titled: "{title}". '
            "Create an engaging description based on the title that encourages bidding."
        )
    else:
        instruction = (
            "Analyze this image and generate a compelling auction description. "
            "Describe what makes this item special and worth bidding on."
        )

    content: list[dict[str, Any]] = [{"type": "text", "text": instruction}]
    if image_b64:
        content.append(
            {"type": "image_url", "image_url": {"url": f"data:image/jpeg;base64,{image_b64}"}}
        )
    return content


def build_messages(image_b64: str | None, title: str | None) -> list[dict[str, Any]]:
    return [
        {"role": "system", "content": system_prompt(has_image=bool(image_b64))},
        {"role": "user", "content": user_content(image_b64, title)},
    ]
