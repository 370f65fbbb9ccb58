from __future__ import annotations

import re

from pydantic import BaseModel, Field

from assistant.core.errors import InvalidInput


DATA_URL_PATTERN = re.compile(r"data:(image/[a-zA-Z0-9.+-]+);base64,(.+)")


class InlineImage(BaseModel):
    mime_type: str = Field(..., description="Image mime type, e.g. image/png")
    data: str = Field(..., description="Base64 payload without the data URL prefix")

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


def parse_image_data_url(value: str) -> InlineImage:
    """Split ``data:image/<subtype>;base64,<payload>`` into mime type and payload.

    The payload is passed through untouched; the provider decodes it.
    """
    match = DATA_URL_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if not match:
        raise InvalidInput("Invalid image data URL")
    return InlineImage(mime_type=match.group(1), data=match.group(2))
