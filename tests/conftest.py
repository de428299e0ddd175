"""Shared test fixtures."""

import asyncio
import io
from collections.abc import Callable
from dataclasses import dataclass, field

import pytest
from PIL import Image

from wedding_share.config import Settings
from wedding_share.containers import AppContainer, build_pipeline_factory
from wedding_share.domain.camera import Facing, MediaStream, MediaTrack
from wedding_share.services.album import InMemoryAlbum
from wedding_share.services.auth import AuthService
from wedding_share.services.camera import CameraDevice, CaptureSession
from wedding_share.services.captions import CaptionClient, CaptionService
from wedding_share.services.colors import ColorValidator
from wedding_share.services.events import EventService
from wedding_share.services.guests import GuestSessions
from wedding_share.services.previews import PreviewRegistry
from wedding_share.services.qr import QrCompositor
from wedding_share.services.share import PrintSurface, ShareService, ShareSurface
from wedding_share.services.sharpness import SharpnessProbe
from wedding_share.services.uploads import UploadPipeline


def make_png(*, sharp: bool = True, size: int = 64) -> bytes:
    """Checkerboard (sharp) or flat gray (blurry) PNG bytes."""
    image = Image.new("L", (size, size), 128)
    if sharp:
        pixels = image.load()
        for y in range(size):
            for x in range(size):
                pixels[x, y] = 255 if (x // 4 + y // 4) % 2 else 0
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@dataclass
class FakeCameraDevice(CameraDevice):
    """Fake camera that records every stream it hands out."""

    frame: bytes = b"\xff\xd8\xff-captured-frame"
    error: Exception | None = None
    streams: list[MediaStream] = field(default_factory=list)
    active_at_request: list[int] = field(default_factory=list)
    requested: list[Facing] = field(default_factory=list)
    delays: list[float] = field(default_factory=list)

    async def open(self, facing: Facing) -> MediaStream:
        self.requested.append(facing)
        self.active_at_request.append(self.active_count())
        if self.delays:
            await asyncio.sleep(self.delays.pop(0))
        if self.error is not None:
            raise self.error
        stream = MediaStream(
            facing=facing,
            tracks=[
                MediaTrack(kind="video", label=f"{facing.value}-video"),
                MediaTrack(kind="audio", label=f"{facing.value}-audio"),
            ],
        )
        self.streams.append(stream)
        return stream

    async def read_frame(self, stream: MediaStream) -> bytes:
        return self.frame

    def active_count(self) -> int:
        return sum(1 for stream in self.streams if stream.active)


@dataclass
class FakeSharpnessProbe(SharpnessProbe):
    """Probe returning a fixed score or raising."""

    value: float = 250.0
    error: Exception | None = None
    calls: int = 0

    def score(self, image_bytes: bytes) -> float:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.value


@dataclass
class FakeCaptionClient(CaptionClient):
    """Caption client returning fixed text, optionally after a gate opens."""

    text: str = "Love, laughter and happily ever after!"
    error: Exception | None = None
    gate: asyncio.Event | None = None
    calls: list[str] = field(default_factory=list)

    async def caption(self, *, model: str, image_data_url: str, prompt: str) -> str:
        self.calls.append(image_data_url)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.text


@dataclass
class FakeShareSurface(ShareSurface):
    shared: list[dict[str, str]] = field(default_factory=list)
    error: Exception | None = None

    async def share(self, *, title: str, text: str, url: str) -> None:
        if self.error is not None:
            raise self.error
        self.shared.append({"title": title, "text": text, "url": url})


@dataclass
class FakePrintSurface(PrintSurface):
    printed: list[bytes] = field(default_factory=list)

    async def print_artifact(self, png_bytes: bytes) -> None:
        self.printed.append(png_bytes)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key=None,
        public_base_url="https://photos.example.com",
        upload_delay_seconds=0,
        seed_album=False,
    )


@pytest.fixture
def camera_device() -> FakeCameraDevice:
    return FakeCameraDevice()


@pytest.fixture
def sharpness_probe() -> FakeSharpnessProbe:
    return FakeSharpnessProbe()


@pytest.fixture
def caption_client() -> FakeCaptionClient:
    return FakeCaptionClient()


@pytest.fixture
def album() -> InMemoryAlbum:
    return InMemoryAlbum()


@pytest.fixture
def previews() -> PreviewRegistry:
    return PreviewRegistry()


@pytest.fixture
def make_pipeline(
    camera_device: FakeCameraDevice,
    sharpness_probe: FakeSharpnessProbe,
    caption_client: FakeCaptionClient,
    album: InMemoryAlbum,
    previews: PreviewRegistry,
) -> Callable[..., UploadPipeline]:
    def factory(*, caption_configured: bool = True) -> UploadPipeline:
        return UploadPipeline(
            camera=CaptureSession(camera_device),
            sharpness_probe=sharpness_probe,
            caption_service=CaptionService(
                client=caption_client if caption_configured else None,
                model="test-model",
            ),
            album=album,
            previews=previews,
            upload_delay_seconds=0,
        )

    return factory


@pytest.fixture
def pipeline(make_pipeline: Callable[..., UploadPipeline]) -> UploadPipeline:
    return make_pipeline()


@pytest.fixture
def print_surface() -> FakePrintSurface:
    return FakePrintSurface()


@pytest.fixture
def container(
    settings: Settings,
    camera_device: FakeCameraDevice,
    sharpness_probe: FakeSharpnessProbe,
    caption_client: FakeCaptionClient,
    album: InMemoryAlbum,
    previews: PreviewRegistry,
    print_surface: FakePrintSurface,
) -> AppContainer:
    color_validator = ColorValidator()
    caption_service = CaptionService(client=caption_client, model=settings.openai_model)
    event_service = EventService(
        color_validator=color_validator,
        compositor=QrCompositor(),
        guest_url=settings.guest_url(),
    )
    guest_sessions = GuestSessions(
        factory=build_pipeline_factory(
            settings,
            camera_device=camera_device,
            sharpness_probe=sharpness_probe,
            caption_service=caption_service,
            album=album,
            previews=previews,
        )
    )

    async def close_resources() -> None:
        guest_sessions.close_all()

    return AppContainer(
        settings=settings,
        auth_service=AuthService(),
        color_validator=color_validator,
        event_service=event_service,
        album=album,
        caption_service=caption_service,
        share_service=ShareService(),
        print_surface=print_surface,
        guest_sessions=guest_sessions,
        close_resources=close_resources,
    )
