"""Branded QR code compositing."""

import base64
import io
import logging
import re
from dataclasses import dataclass
from functools import lru_cache

import qrcode
from PIL import Image, ImageDraw, ImageFont
from qrcode.constants import ERROR_CORRECT_H
from qrcode.exceptions import DataOverflowError

from wedding_share.domain.errors import EncodeError, RenderError
from wedding_share.domain.qr import QrArtifact
from wedding_share.services.colors import MIN_CONTRAST_RATIO, contrast_ratio

FALLBACK_PRIMARY = "#000000"
FALLBACK_SECONDARY = "#FFFFFF"
CENTER_FRACTION = 0.4
TEXT_FIT_FRACTION = 0.9

_NAME_SEPARATOR = re.compile(r"\band\b|&", re.IGNORECASE)
_DEFAULT_FONTS = ("DejaVuSerif-Bold.ttf", "DejaVuSans-Bold.ttf")

_logger = logging.getLogger(__name__)

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


@dataclass
class QrCompositor:
    """Renders a QR code with a legible initials badge in the center."""

    size: int = 256
    max_font_size: int = 48
    min_font_size: int = 10
    font_path: str | None = None

    def compose(
        self, target_url: str, couple_names: str, primary: str, secondary: str
    ) -> QrArtifact:
        """Render the branded QR code for ``target_url``.

        Colors below the WCAG AA ratio are replaced by black on white for
        both the code and the initials.
        """
        ratio = contrast_ratio(primary, secondary)
        fallback = ratio < MIN_CONTRAST_RATIO
        if fallback:
            _logger.warning(
                "Theme colors have a low contrast ratio of %.2f:1; "
                "falling back to black and white for the QR code",
                ratio,
            )
            primary, secondary = FALLBACK_PRIMARY, FALLBACK_SECONDARY

        matrix = _encode(target_url)
        initials = derive_initials(couple_names)
        try:
            canvas = Image.new("RGBA", (self.size, self.size), secondary)
            canvas.alpha_composite(self._render_matrix(matrix, primary))

            draw = ImageDraw.Draw(canvas)
            box = self.size * CENTER_FRACTION
            start = (self.size - box) / 2
            draw.rectangle((start, start, start + box, start + box), fill=secondary)

            font_size = self.max_font_size
            if initials:
                font, font_size = self._fit_font(draw, initials, box * TEXT_FIT_FRACTION)
                left, top, right, bottom = draw.textbbox((0, 0), initials, font=font)
                x = (self.size - (right - left)) / 2 - left
                y = (self.size - (bottom - top)) / 2 - top
                draw.text((x, y), initials, fill=primary, font=font)

            buffer = io.BytesIO()
            canvas.save(buffer, format="PNG")
        except (OSError, ValueError) as exc:
            raise RenderError(f"Could not render QR canvas: {exc}") from exc

        png_bytes = buffer.getvalue()
        encoded = base64.b64encode(png_bytes).decode("utf-8")
        return QrArtifact(
            png_bytes=png_bytes,
            data_url=f"data:image/png;base64,{encoded}",
            primary=primary,
            secondary=secondary,
            initials=initials,
            font_size=font_size,
            fallback_applied=fallback,
        )

    def _render_matrix(self, matrix: list[list[bool]], color: str) -> Image.Image:
        """Paint dark modules onto a transparent layer of the canvas size."""
        layer = Image.new("RGBA", (self.size, self.size), (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        count = len(matrix)
        edges = [round(i * self.size / count) for i in range(count + 1)]
        for row, modules in enumerate(matrix):
            for col, dark in enumerate(modules):
                if not dark:
                    continue
                draw.rectangle(
                    (edges[col], edges[row], edges[col + 1] - 1, edges[row + 1] - 1),
                    fill=color,
                )
        return layer

    def _fit_font(
        self, draw: ImageDraw.ImageDraw, text: str, max_width: float
    ) -> tuple[Font, int]:
        """Shrink from the max size until the text fits or the floor is hit."""
        size = self.max_font_size
        font = _load_font(self.font_path, size)
        while draw.textlength(text, font=font) > max_width and size > self.min_font_size:
            size -= 1
            font = _load_font(self.font_path, size)
        return font, size


def derive_initials(couple_names: str) -> str:
    """``"Alice and Bob"`` -> ``"A & B"``."""
    if not couple_names:
        return ""
    letters = [
        segment.strip()[0].upper()
        for segment in _NAME_SEPARATOR.split(couple_names)
        if segment.strip()
    ]
    return " & ".join(letters)


def _encode(target_url: str) -> list[list[bool]]:
    """Build the QR module matrix at high error correction."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECT_H,
        box_size=1,
        border=1,
    )
    try:
        qr.add_data(target_url)
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as exc:
        raise EncodeError(f"Could not encode QR payload: {exc}") from exc
    return qr.get_matrix()


@lru_cache(maxsize=64)
def _load_font(font_path: str | None, size: int) -> Font:
    candidates = (font_path,) if font_path else _DEFAULT_FONTS
    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)
