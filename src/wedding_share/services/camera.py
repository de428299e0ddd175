"""Camera acquisition, frame capture and stream teardown."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from wedding_share.domain.camera import Facing, MediaStream
from wedding_share.domain.errors import (
    CameraError,
    PermissionDeniedError,
    UnknownCameraError,
)

_logger = logging.getLogger(__name__)


class CameraDevice(Protocol):
    """Interface for camera hardware."""

    async def open(self, facing: Facing) -> MediaStream:
        """Acquire a live stream for the facing mode."""

    async def read_frame(self, stream: MediaStream) -> bytes:
        """Grab one JPEG-encoded frame from a live stream."""


@dataclass
class CaptureSession:
    """Owns the single live camera stream of a guest session."""

    device: CameraDevice
    facing: Facing = Facing.ENVIRONMENT
    _stream: MediaStream | None = field(default=None, init=False)
    _attempt: int = field(default=0, init=False)

    @property
    def active_stream(self) -> MediaStream | None:
        if self._stream is not None and self._stream.active:
            return self._stream
        return None

    async def start(self, facing: Facing | None = None) -> MediaStream:
        """Stop any live stream, then acquire a new one."""
        self.stop()
        if facing is not None:
            self.facing = facing
        self._attempt += 1
        attempt = self._attempt
        try:
            stream = await self.device.open(self.facing)
        except CameraError as exc:
            _logger.warning("Camera start failed (%s): %s", self.facing.value, exc)
            raise
        except PermissionError as exc:
            _logger.warning("Camera permission denied: %s", exc)
            raise PermissionDeniedError() from exc
        except Exception as exc:
            _logger.exception("Camera start failed (%s)", self.facing.value)
            raise UnknownCameraError() from exc

        if attempt != self._attempt:
            # Superseded while waiting on the device.
            stream.stop()
            raise UnknownCameraError("Camera request was superseded.")
        self._stream = stream
        _logger.info("Camera started: facing=%s", self.facing.value)
        return stream

    async def switch_camera(self) -> MediaStream:
        """Release the current stream and open the opposite facing mode."""
        self.stop()
        return await self.start(self.facing.opposite)

    async def capture(self) -> bytes:
        """Grab a frame from the live stream and stop the stream."""
        stream = self.active_stream
        if stream is None:
            raise UnknownCameraError("Camera is not running.")
        try:
            return await self.device.read_frame(stream)
        except CameraError:
            raise
        except Exception as exc:
            _logger.exception("Frame capture failed")
            raise UnknownCameraError("Failed to capture photo.") from exc
        finally:
            self.stop()

    def stop(self) -> None:
        """Stop every track of the live stream; safe to call repeatedly."""
        if self._stream is None:
            return
        self._stream.stop()
        self._stream = None
        _logger.info("Camera stopped")
