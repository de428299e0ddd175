"""QR artifact model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class QrArtifact:
    """Composited, branded QR code."""

    png_bytes: bytes
    data_url: str
    primary: str
    secondary: str
    initials: str
    font_size: int
    fallback_applied: bool
