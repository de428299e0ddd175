"""Host event creation and the current event."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

from wedding_share.domain.errors import MissingFieldError, ThemeColorsError
from wedding_share.domain.models import Theme, ThemeStyle, WeddingEvent
from wedding_share.domain.qr import QrArtifact
from wedding_share.services.colors import ColorValidator
from wedding_share.services.state import Observable

_logger = logging.getLogger(__name__)


class Compositor(Protocol):
    """Interface for rendering the event QR code."""

    def compose(
        self, target_url: str, couple_names: str, primary: str, secondary: str
    ) -> QrArtifact:
        """Return the branded QR artifact."""


@dataclass(frozen=True)
class EventDraft:
    """Raw host form input."""

    couple_names: str
    event_date: str
    style: ThemeStyle = ThemeStyle.MODERN
    colors: tuple[str, ...] = ()


@dataclass
class EventService:
    """Validates host input, renders the QR code and holds the current event."""

    color_validator: ColorValidator
    compositor: Compositor
    guest_url: str
    current: Observable[WeddingEvent | None] = field(
        default_factory=lambda: Observable(None)
    )
    artifact: QrArtifact | None = None

    @property
    def event(self) -> WeddingEvent | None:
        return self.current.get()

    async def create_event(self, draft: EventDraft) -> WeddingEvent:
        """Create the event; on any failure the current event is unchanged.

        Raises ``ValidationError`` for bad input and ``QrCompositionError``
        when the QR code cannot be produced.
        """
        theme = self.validate_draft(draft)
        artifact = await asyncio.to_thread(
            self.compositor.compose,
            self.guest_url,
            draft.couple_names,
            theme.primary,
            theme.secondary,
        )
        previous = self.event
        event = WeddingEvent(
            couple_names=draft.couple_names.strip(),
            event_date=draft.event_date.strip(),
            theme=theme,
            cover_photo_url=previous.cover_photo_url if previous else None,
            qr_code_url=artifact.data_url,
        )
        self.artifact = artifact
        self.current.set(event)
        _logger.info(
            "Event created: style=%s fallback=%s",
            theme.style.value,
            artifact.fallback_applied,
        )
        return event

    def validate_draft(self, draft: EventDraft) -> Theme:
        """Return the canonical theme for the draft or raise ``ValidationError``."""
        raws = draft.colors or Theme.preset(draft.style).colors
        results = self.color_validator.check(raws)
        if any(not result.valid for result in results):
            raise ThemeColorsError(results)
        if not draft.couple_names.strip():
            raise MissingFieldError("couple names")
        if not draft.event_date.strip():
            raise MissingFieldError("event date")
        try:
            return Theme(
                style=draft.style,
                colors=tuple(result.hex for result in results if result.hex),
            )
        except ValueError as exc:
            raise ThemeColorsError(results) from exc

    def update_cover_photo(self, url: str) -> WeddingEvent | None:
        """Patch the cover photo of the current event, if any."""
        return self.current.update(
            lambda event: event.with_cover_photo(url) if event else None
        )

    def clear_event(self) -> None:
        self.artifact = None
        self.current.set(None)
