"""Share and print surfaces for the event."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from wedding_share.domain.models import WeddingEvent

_logger = logging.getLogger(__name__)


class ShareSurface(Protocol):
    """Native share capability of the host environment."""

    async def share(self, *, title: str, text: str, url: str) -> None:
        """Open the share sheet with the given payload."""


class PrintSurface(Protocol):
    """Print dialog of the host environment."""

    async def print_artifact(self, png_bytes: bytes) -> None:
        """Send the QR artifact to the printer."""


class ShareOutcome(str, Enum):
    SHARED = "shared"
    UNSUPPORTED = "unsupported"
    FAILED = "failed"


@dataclass
class ShareService:
    """Shares the album invitation when a share surface exists."""

    surface: ShareSurface | None = None

    def is_supported(self) -> bool:
        return self.surface is not None

    async def share_event(self, event: WeddingEvent, url: str) -> ShareOutcome:
        if self.surface is None:
            return ShareOutcome.UNSUPPORTED
        names = event.couple_names
        try:
            await self.surface.share(
                title=f"Photos from {names}'s Wedding!",
                text=f"Join the fun and add your photos to {names}'s wedding album!",
                url=url,
            )
        except Exception:
            _logger.exception("Error sharing link")
            return ShareOutcome.FAILED
        return ShareOutcome.SHARED
