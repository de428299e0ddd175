"""Color validation results."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ColorCheckResult:
    """Validation outcome for one theme color slot."""

    index: int
    raw: str
    valid: bool
    hex: str | None
    error: str | None = None
