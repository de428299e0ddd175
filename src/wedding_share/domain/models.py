"""Domain models for events, themes and photos."""

from dataclasses import dataclass, field, replace
from enum import Enum

MAX_THEME_COLORS = 3
MIN_THEME_COLORS = 1
NEW_SLOT_COLOR = "#CCCCCC"


class ThemeStyle(str, Enum):
    """Visual style of the event page."""

    MODERN = "Modern"
    RETRO = "Retro"
    LUXURY = "Luxury"

    @property
    def style_class(self) -> str:
        return f"theme-{self.value.lower()}"


THEME_PRESETS: dict[ThemeStyle, tuple[str, ...]] = {
    ThemeStyle.MODERN: ("#4169E1", "#708090"),
    ThemeStyle.RETRO: ("#F4A460", "#FFDAB9"),
    ThemeStyle.LUXURY: ("#FFD700", "#2F4F4F"),
}


@dataclass(frozen=True)
class Theme:
    """Event theme with one to three colors."""

    style: ThemeStyle
    colors: tuple[str, ...]
    style_class: str = field(init=False)

    def __post_init__(self) -> None:
        if not MIN_THEME_COLORS <= len(self.colors) <= MAX_THEME_COLORS:
            raise ValueError(
                f"Theme needs {MIN_THEME_COLORS}-{MAX_THEME_COLORS} colors, "
                f"got {len(self.colors)}"
            )
        object.__setattr__(self, "style_class", self.style.style_class)

    @classmethod
    def preset(cls, style: ThemeStyle) -> "Theme":
        """Return the theme with the style's default colors."""
        return cls(style=style, colors=THEME_PRESETS[style])

    def with_style(self, style: ThemeStyle) -> "Theme":
        """Switch style, resetting colors to the style preset."""
        return Theme.preset(style)

    def with_color(self, index: int, color: str) -> "Theme":
        colors = list(self.colors)
        colors[index] = color
        return replace(self, colors=tuple(colors))

    def with_color_added(self) -> "Theme":
        """Append a placeholder slot, unless already at the cap."""
        if len(self.colors) >= MAX_THEME_COLORS:
            return self
        return replace(self, colors=(*self.colors, NEW_SLOT_COLOR))

    def with_color_removed(self, index: int) -> "Theme":
        """Drop a slot, unless it is the last one."""
        if len(self.colors) <= MIN_THEME_COLORS:
            return self
        colors = tuple(c for i, c in enumerate(self.colors) if i != index)
        return replace(self, colors=colors)

    @property
    def primary(self) -> str:
        return self.colors[0]

    @property
    def secondary(self) -> str:
        return self.colors[1] if len(self.colors) > 1 else "#FFFFFF"


@dataclass(frozen=True)
class WeddingEvent:
    """Event configured by the host and shown to guests."""

    couple_names: str
    event_date: str
    theme: Theme
    cover_photo_url: str | None = None
    qr_code_url: str | None = None

    def with_cover_photo(self, url: str) -> "WeddingEvent":
        return replace(self, cover_photo_url=url)


@dataclass(frozen=True)
class Photo:
    """Guest photo in the shared album."""

    image_url: str
    note: str


@dataclass(frozen=True)
class HostUser:
    """Signed-in event host."""

    name: str
    email: str
