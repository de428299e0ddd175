"""Shared photo album."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from wedding_share.domain.models import Photo
from wedding_share.services.state import Observable

SAMPLE_PHOTOS: tuple[Photo, ...] = (
    Photo(
        image_url="https://picsum.photos/seed/guest1/400/300",
        note="Congratulations! Such a beautiful ceremony.",
    ),
    Photo(
        image_url="https://picsum.photos/seed/guest2/400/300",
        note="So much fun on the dance floor! Best wishes to you both.",
    ),
)

_logger = logging.getLogger(__name__)


class AlbumStore(Protocol):
    """Storage interface for album photos."""

    def append(self, photo: Photo) -> None:
        """Add a photo to the front of the album."""

    def photos(self) -> list[Photo]:
        """Return photos, newest first."""


@dataclass
class InMemoryAlbum(AlbumStore):
    """Album kept in memory; no dedup, newest first."""

    state: Observable[tuple[Photo, ...]] = field(
        default_factory=lambda: Observable(())
    )

    @classmethod
    def seeded(cls) -> "InMemoryAlbum":
        """Album pre-filled with sample photos."""
        return cls(state=Observable(SAMPLE_PHOTOS))

    def append(self, photo: Photo) -> None:
        self.state.update(lambda current: (photo, *current))
        _logger.info("Album photo added: total=%s", len(self.state.value))

    def photos(self) -> list[Photo]:
        return list(self.state.value)
