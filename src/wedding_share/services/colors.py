"""Color parsing, canonicalization and WCAG contrast checks."""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from PIL import Image

from wedding_share.domain.colors import ColorCheckResult
from wedding_share.domain.errors import (
    EmptyColorError,
    InvalidColorError,
    ValidationError,
)

MIN_CONTRAST_RATIO = 4.5

_HEX_TRIPLET = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)


@dataclass
class ColorValidator:
    """Validates user color input and measures contrast."""

    def validate(self, raw: str) -> str:
        """Return the canonical ``#RRGGBB`` form of a CSS-style color.

        The color is painted into an off-screen 1x1 image and read back, so
        anything Pillow can paint (hex, names, ``rgb()``, ``hsl()``) is
        accepted.
        """
        cleaned = (raw or "").strip()
        if not cleaned:
            raise EmptyColorError()
        try:
            surface = Image.new("RGB", (1, 1), cleaned)
        except ValueError as exc:
            raise InvalidColorError(cleaned) from exc
        r, g, b = surface.getpixel((0, 0))
        return f"#{r:02X}{g:02X}{b:02X}"

    def check(self, raws: Sequence[str]) -> list[ColorCheckResult]:
        """Validate every theme slot; never raises."""
        results: list[ColorCheckResult] = []
        for index, raw in enumerate(raws):
            try:
                hex_value = self.validate(raw)
            except ValidationError as exc:
                results.append(
                    ColorCheckResult(
                        index=index, raw=raw, valid=False, hex=None, error=str(exc)
                    )
                )
                continue
            results.append(
                ColorCheckResult(index=index, raw=raw, valid=True, hex=hex_value)
            )
        return results

    def contrast_ratio(self, hex_a: str, hex_b: str) -> float:
        return contrast_ratio(hex_a, hex_b)


def hex_to_rgb(value: str) -> tuple[int, int, int] | None:
    """Parse a six-digit hex triplet, with or without ``#``."""
    match = _HEX_TRIPLET.match(value.strip()) if value else None
    if match is None:
        return None
    r, g, b = (int(part, 16) for part in match.groups())
    return r, g, b


def luminance(r: int, g: int, b: int) -> float:
    """sRGB relative luminance of an 8-bit color."""

    def channel(value: int) -> float:
        c = value / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    return 0.2126 * channel(r) + 0.7152 * channel(g) + 0.0722 * channel(b)


def contrast_ratio(hex_a: str, hex_b: str) -> float:
    """WCAG contrast ratio; 1.0 when either color is not a hex triplet."""
    rgb_a = hex_to_rgb(hex_a)
    rgb_b = hex_to_rgb(hex_b)
    if rgb_a is None or rgb_b is None:
        return 1.0
    lum_a = luminance(*rgb_a)
    lum_b = luminance(*rgb_b)
    lighter = max(lum_a, lum_b)
    darker = min(lum_a, lum_b)
    return (lighter + 0.05) / (darker + 0.05)
