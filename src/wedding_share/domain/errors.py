"""Domain error taxonomy."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wedding_share.domain.colors import ColorCheckResult


class WeddingShareError(Exception):
    """Base error for the application."""


class ValidationError(WeddingShareError):
    """User input rejected at the form edge."""


class EmptyColorError(ValidationError):
    """Color input was empty or whitespace."""

    def __init__(self) -> None:
        super().__init__("Color cannot be empty.")


class InvalidColorError(ValidationError):
    """Color input is not a recognized CSS color expression."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"'{raw}' is not a valid color.")
        self.raw = raw


class MissingFieldError(ValidationError):
    """A required form field was left blank."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Please fill in {field}.")
        self.field = field


class ThemeColorsError(ValidationError):
    """One or more theme color slots failed validation."""

    def __init__(self, results: list[ColorCheckResult]) -> None:
        super().__init__("Please fix invalid colors before creating the event.")
        self.results = results


class CameraError(WeddingShareError):
    """Camera acquisition or capture failed."""

    message = "Could not access the camera. Please check your device settings."

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)


class PermissionDeniedError(CameraError):
    """The user declined camera access."""

    message = (
        "Camera access was denied. Please enable camera permissions "
        "and try again."
    )


class DeviceNotFoundError(CameraError):
    """No camera hardware is available."""

    message = (
        "No camera was found on your device. "
        "You can still upload a photo from your library."
    )


class UnknownCameraError(CameraError):
    """Camera failed for an unclassified reason."""


class QrCompositionError(WeddingShareError):
    """QR artifact could not be produced."""


class RenderError(QrCompositionError):
    """Drawing surface could not be created or painted."""


class EncodeError(QrCompositionError):
    """QR payload could not be encoded."""


class CaptionError(WeddingShareError):
    """Caption backend failed; contained by the caption service."""


class InvalidTransitionError(WeddingShareError):
    """Guest action is not allowed in the current upload state."""

    def __init__(self, action: str, state: str) -> None:
        super().__init__(f"Cannot {action} while {state}.")
        self.action = action
        self.state = state
