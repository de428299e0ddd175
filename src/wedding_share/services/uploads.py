"""State machine for the guest capture and upload flow."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from wedding_share.domain.errors import CameraError, InvalidTransitionError
from wedding_share.domain.models import Photo
from wedding_share.domain.uploads import GuestUpload, SelectedFile, UploadState
from wedding_share.services.album import AlbumStore
from wedding_share.services.camera import CaptureSession
from wedding_share.services.captions import CaptionService
from wedding_share.services.previews import PreviewRegistry, to_data_url
from wedding_share.services.sharpness import SharpnessProbe
from wedding_share.services.state import Observable

BLUR_THRESHOLD = 100.0
DEFAULT_NOTE = "No note left."
CAPTURE_FILENAME = "capture.jpg"

_logger = logging.getLogger(__name__)


@dataclass
class UploadPipeline:
    """Guides one guest from photo intake to album submission.

    Every transition replaces the ``GuestUpload`` snapshot held in ``state``.
    Async work started before a newer file selection or a reset is
    discarded when it completes.
    """

    camera: CaptureSession
    sharpness_probe: SharpnessProbe
    caption_service: CaptionService
    album: AlbumStore
    previews: PreviewRegistry
    blur_threshold: float = BLUR_THRESHOLD
    upload_delay_seconds: float = 2.0
    state: Observable[GuestUpload] = field(
        default_factory=lambda: Observable(GuestUpload())
    )
    _generation: int = field(default=0, init=False)
    _camera_attempt: int = field(default=0, init=False)

    @property
    def snapshot(self) -> GuestUpload:
        return self.state.get()

    def subscribe(self, subscriber: Callable[[GuestUpload], None]) -> Callable[[], None]:
        return self.state.subscribe(subscriber)

    async def start_camera(self) -> GuestUpload:
        """Open the camera; failures return the guest to idle with a message."""
        current = self._require("start the camera", UploadState.IDLE)
        attempt = self._next_camera_attempt()
        self.state.set(
            replace(current, state=UploadState.CAPTURING, camera_error=None)
        )
        try:
            await self.camera.start(current.facing)
        except CameraError as exc:
            return self._camera_failed(exc, attempt)
        if self.snapshot.state is not UploadState.CAPTURING:
            self.camera.stop()
        return self.snapshot

    async def switch_camera(self) -> GuestUpload:
        self._require("switch camera", UploadState.CAPTURING)
        attempt = self._next_camera_attempt()
        try:
            await self.camera.switch_camera()
        except CameraError as exc:
            return self._camera_failed(exc, attempt)
        if self.snapshot.state is not UploadState.CAPTURING:
            # Guest left the camera while the new stream was opening.
            self.camera.stop()
            return self.snapshot
        return self.state.update(lambda s: replace(s, facing=self.camera.facing))

    def stop_camera(self) -> GuestUpload:
        current = self._require("stop the camera", UploadState.CAPTURING)
        self._release_camera()
        return self.state.set(replace(current, state=UploadState.IDLE))

    async def capture_photo(self) -> GuestUpload:
        """Grab a frame, stop the stream and check the captured photo."""
        self._require("capture a photo", UploadState.CAPTURING)
        attempt = self._next_camera_attempt()
        try:
            content = await self.camera.capture()
        except CameraError as exc:
            return self._camera_failed(exc, attempt)
        return await self.select_file(
            SelectedFile(content=content, filename=CAPTURE_FILENAME)
        )

    async def select_file(self, file: SelectedFile) -> GuestUpload:
        """Take a file into preview; the blur check never blocks."""
        current = self._require(
            "select a photo",
            UploadState.IDLE,
            UploadState.CAPTURING,
            UploadState.PREVIEW,
        )
        self._release_camera()
        generation = self._next_generation()
        self.previews.revoke(current.preview_url)
        self.state.set(
            GuestUpload(
                state=UploadState.CHECKING,
                selected_file=file,
                preview_url=self.previews.create(file),
                facing=current.facing,
            )
        )

        score: float | None = None
        try:
            score = await asyncio.to_thread(self.sharpness_probe.score, file.content)
        except Exception:
            _logger.exception("Sharpness check failed; continuing without warning")

        if generation != self._generation:
            return self.snapshot
        blur_warning = score is not None and score < self.blur_threshold
        if blur_warning:
            _logger.info("Blurry photo: sharpness=%.1f", score)
        return self.state.update(
            lambda s: replace(
                s,
                state=UploadState.PREVIEW,
                blur_warning=blur_warning,
                sharpness=score,
            )
        )

    async def generate_caption(self) -> GuestUpload:
        """Ask the caption service for a caption and prefill the note."""
        current = self._require("generate a caption", UploadState.PREVIEW)
        if current.selected_file is None or not self.caption_service.is_configured():
            return current
        generation = self._generation
        self.state.set(
            replace(current, state=UploadState.CAPTIONING, is_generating_caption=True)
        )
        caption = await self.caption_service.generate_caption(
            current.selected_file.content
        )
        if (
            generation != self._generation
            or self.snapshot.state is not UploadState.CAPTIONING
        ):
            _logger.info("Discarding stale caption")
            return self.snapshot
        return self.state.update(
            lambda s: replace(
                s,
                state=UploadState.PREVIEW,
                caption=caption,
                note=caption,
                is_generating_caption=False,
            )
        )

    def update_note(self, note: str) -> GuestUpload:
        current = self._require(
            "edit the note", UploadState.PREVIEW, UploadState.CAPTIONING
        )
        return self.state.set(replace(current, note=note))

    async def submit(self) -> GuestUpload:
        """Simulate the upload, add the photo to the album, release the preview."""
        current = self._require("upload", UploadState.PREVIEW)
        if current.selected_file is None:
            raise InvalidTransitionError("upload", "no photo is selected")
        generation = self._generation
        self.state.set(replace(current, state=UploadState.UPLOADING))
        await asyncio.sleep(self.upload_delay_seconds)
        if generation != self._generation:
            _logger.info("Discarding upload superseded by reset")
            return self.snapshot

        uploaded = self.snapshot
        self.album.append(
            Photo(
                image_url=to_data_url(current.selected_file),
                note=uploaded.note or uploaded.caption or DEFAULT_NOTE,
            )
        )
        self.previews.revoke(uploaded.preview_url)
        return self.state.set(
            replace(
                uploaded,
                state=UploadState.SUCCESS,
                selected_file=None,
                preview_url=None,
            )
        )

    def reset(self) -> GuestUpload:
        """Drop the current photo and go back to idle."""
        current = self.snapshot
        self._release_camera()
        self._next_generation()
        self.previews.revoke(current.preview_url)
        return self.state.set(GuestUpload(facing=current.facing))

    def upload_another(self) -> GuestUpload:
        return self.reset()

    def close(self) -> None:
        """Release the camera and preview held by this guest."""
        self._release_camera()
        self._next_generation()
        self.previews.revoke(self.snapshot.preview_url)

    def _require(self, action: str, *allowed: UploadState) -> GuestUpload:
        current = self.snapshot
        if current.state not in allowed:
            raise InvalidTransitionError(action, current.state.value)
        return current

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _next_camera_attempt(self) -> int:
        self._camera_attempt += 1
        return self._camera_attempt

    def _release_camera(self) -> None:
        self._next_camera_attempt()
        self.camera.stop()

    def _camera_failed(self, exc: CameraError, attempt: int) -> GuestUpload:
        if attempt != self._camera_attempt:
            # A newer camera request owns the session now.
            _logger.info("Ignoring superseded camera failure: %s", exc)
            return self.snapshot
        self.camera.stop()
        if self.snapshot.state is not UploadState.CAPTURING:
            return self.snapshot
        return self.state.update(
            lambda s: replace(s, state=UploadState.IDLE, camera_error=str(exc))
        )
