"""Guest upload flow state."""

from dataclasses import dataclass
from enum import Enum

from wedding_share.domain.camera import Facing


class UploadState(str, Enum):
    """Stage of the guest upload flow."""

    IDLE = "idle"
    CAPTURING = "capturing"
    PREVIEW = "preview"
    CHECKING = "checking"
    CAPTIONING = "captioning"
    UPLOADING = "uploading"
    SUCCESS = "success"


REST_STATES = frozenset({UploadState.IDLE, UploadState.SUCCESS})


@dataclass(frozen=True)
class SelectedFile:
    """Photo chosen or captured by the guest."""

    content: bytes
    filename: str
    content_type: str = "image/jpeg"


@dataclass(frozen=True)
class GuestUpload:
    """Snapshot of one guest's upload flow."""

    state: UploadState = UploadState.IDLE
    selected_file: SelectedFile | None = None
    preview_url: str | None = None
    blur_warning: bool = False
    sharpness: float | None = None
    caption: str = ""
    note: str = ""
    is_generating_caption: bool = False
    camera_error: str | None = None
    facing: Facing = Facing.ENVIRONMENT

    @property
    def at_rest(self) -> bool:
        return self.state in REST_STATES
