"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from wedding_share.adapters.openai_caption_client import OpenAICaptionClient
from wedding_share.adapters.opencv_camera import OpenCvCameraDevice
from wedding_share.adapters.system_print_surface import SystemPrintSurface
from wedding_share.config import Settings
from wedding_share.domain.camera import Facing
from wedding_share.services.album import InMemoryAlbum
from wedding_share.services.auth import AuthService
from wedding_share.services.camera import CameraDevice, CaptureSession
from wedding_share.services.captions import CaptionService
from wedding_share.services.colors import ColorValidator
from wedding_share.services.events import EventService
from wedding_share.services.guests import GuestSessions
from wedding_share.services.previews import PreviewRegistry
from wedding_share.services.qr import QrCompositor
from wedding_share.services.share import PrintSurface, ShareService
from wedding_share.services.sharpness import LaplacianSharpnessProbe, SharpnessProbe
from wedding_share.services.uploads import UploadPipeline


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    color_validator: ColorValidator
    event_service: EventService
    album: InMemoryAlbum
    caption_service: CaptionService
    share_service: ShareService
    print_surface: PrintSurface
    guest_sessions: GuestSessions
    close_resources: Callable[[], Awaitable[None]]


def build_pipeline_factory(  # noqa: PLR0913
    settings: Settings,
    camera_device: CameraDevice,
    sharpness_probe: SharpnessProbe,
    caption_service: CaptionService,
    album: InMemoryAlbum,
    previews: PreviewRegistry,
) -> Callable[[], UploadPipeline]:
    """Return a factory creating one pipeline per guest session."""

    def factory() -> UploadPipeline:
        return UploadPipeline(
            camera=CaptureSession(camera_device),
            sharpness_probe=sharpness_probe,
            caption_service=caption_service,
            album=album,
            previews=previews,
            blur_threshold=settings.blur_threshold,
            upload_delay_seconds=settings.upload_delay_seconds,
        )

    return factory


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    color_validator = ColorValidator()
    compositor = QrCompositor(
        size=resolved_settings.qr_size,
        max_font_size=resolved_settings.qr_max_font_size,
        min_font_size=resolved_settings.qr_min_font_size,
        font_path=resolved_settings.qr_font_path,
    )
    event_service = EventService(
        color_validator=color_validator,
        compositor=compositor,
        guest_url=resolved_settings.guest_url(),
    )
    album = InMemoryAlbum.seeded() if resolved_settings.seed_album else InMemoryAlbum()
    caption_client = (
        OpenAICaptionClient.create(resolved_settings.openai_api_key)
        if resolved_settings.openai_api_key
        else None
    )
    caption_service = CaptionService(
        client=caption_client, model=resolved_settings.openai_model
    )
    camera_device = OpenCvCameraDevice(
        indexes={
            Facing.ENVIRONMENT: resolved_settings.camera_index_environment,
            Facing.USER: resolved_settings.camera_index_user,
        }
    )
    guest_sessions = GuestSessions(
        factory=build_pipeline_factory(
            resolved_settings,
            camera_device=camera_device,
            sharpness_probe=LaplacianSharpnessProbe(),
            caption_service=caption_service,
            album=album,
            previews=PreviewRegistry(),
        ),
        max_sessions=resolved_settings.max_guest_sessions,
    )

    async def close_resources() -> None:
        guest_sessions.close_all()
        if caption_client is not None:
            await caption_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=AuthService(),
        color_validator=color_validator,
        event_service=event_service,
        album=album,
        caption_service=caption_service,
        share_service=ShareService(),
        print_surface=SystemPrintSurface(command=resolved_settings.print_command),
        guest_sessions=guest_sessions,
        close_resources=close_resources,
    )
