"""Camera stream models."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum


class Facing(str, Enum):
    """Camera facing mode."""

    USER = "user"
    ENVIRONMENT = "environment"

    @property
    def opposite(self) -> "Facing":
        return Facing.USER if self is Facing.ENVIRONMENT else Facing.ENVIRONMENT


@dataclass
class MediaTrack:
    """Single hardware track of a camera stream."""

    kind: str
    label: str
    on_stop: Callable[[], None] | None = None
    stopped: bool = False

    def stop(self) -> None:
        """Release the underlying hardware; safe to call twice."""
        if self.stopped:
            return
        self.stopped = True
        if self.on_stop is not None:
            self.on_stop()


@dataclass
class MediaStream:
    """Live camera stream made of one or more tracks."""

    facing: Facing
    tracks: list[MediaTrack] = field(default_factory=list)
    handle: object | None = None

    @property
    def active(self) -> bool:
        return any(not track.stopped for track in self.tracks)

    def stop(self) -> None:
        for track in self.tracks:
            track.stop()
