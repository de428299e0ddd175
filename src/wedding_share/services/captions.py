"""Photo caption generation using LLMs."""

import logging
from dataclasses import dataclass
from typing import Protocol

from wedding_share.domain.errors import CaptionError
from wedding_share.services.previews import detect_mime_type, encode_data_url

CAPTION_PROMPT = (
    "Generate a fun, short, witty caption for this wedding photo "
    "in 140 characters or less."
)
NOT_CONFIGURED_MESSAGE = "AI is not configured. Please add an API key."
FAILURE_MESSAGE = "Could not generate a caption at this time."

_logger = logging.getLogger(__name__)


class CaptionClient(Protocol):
    """Interface for LLM image captioning."""

    async def caption(self, *, model: str, image_data_url: str, prompt: str) -> str:
        """Return caption text for the image."""


@dataclass
class CaptionService:
    """Service that prepares caption prompts and contains backend failures."""

    client: CaptionClient | None
    model: str

    def is_configured(self) -> bool:
        return self.client is not None

    async def generate_caption(self, image_bytes: bytes) -> str:
        """Return a caption, or a fixed apology when the backend is unusable."""
        if self.client is None:
            return NOT_CONFIGURED_MESSAGE
        try:
            return await self._request(image_bytes)
        except CaptionError:
            _logger.exception("Caption generation failed")
            return FAILURE_MESSAGE

    async def _request(self, image_bytes: bytes) -> str:
        try:
            text = await self.client.caption(
                model=self.model,
                image_data_url=encode_data_url(
                    image_bytes, detect_mime_type(image_bytes)
                ),
                prompt=CAPTION_PROMPT,
            )
        except Exception as exc:
            raise CaptionError(str(exc)) from exc
        cleaned = (text or "").strip()
        if not cleaned:
            raise CaptionError("Caption backend returned an empty response")
        return cleaned
