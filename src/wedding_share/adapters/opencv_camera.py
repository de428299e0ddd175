"""OpenCV-backed camera device."""

import asyncio
from dataclasses import dataclass

import cv2

from wedding_share.domain.camera import Facing, MediaStream, MediaTrack
from wedding_share.domain.errors import DeviceNotFoundError, UnknownCameraError
from wedding_share.services.camera import CameraDevice


@dataclass
class OpenCvCameraDevice(CameraDevice):
    """Camera device using ``cv2.VideoCapture`` indexes per facing mode."""

    indexes: dict[Facing, int]
    jpeg_quality: int = 95

    async def open(self, facing: Facing) -> MediaStream:
        """Open the capture device mapped to the facing mode."""
        index = self.indexes.get(facing)
        if index is None:
            raise DeviceNotFoundError()
        capture = await asyncio.to_thread(cv2.VideoCapture, index)
        if not capture.isOpened():
            capture.release()
            raise DeviceNotFoundError()
        track = MediaTrack(kind="video", label=f"camera:{index}", on_stop=capture.release)
        return MediaStream(facing=facing, tracks=[track], handle=capture)

    async def read_frame(self, stream: MediaStream) -> bytes:
        """Read one frame and encode it as JPEG."""
        capture = stream.handle
        if not isinstance(capture, cv2.VideoCapture):
            raise UnknownCameraError("Stream is not an OpenCV capture.")
        ok, frame = await asyncio.to_thread(capture.read)
        if not ok:
            raise UnknownCameraError("Failed to capture photo.")
        ok, buffer = cv2.imencode(
            ".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, self.jpeg_quality]
        )
        if not ok:
            raise UnknownCameraError("Failed to encode captured photo.")
        return buffer.tobytes()
