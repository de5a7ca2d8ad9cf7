"""Scannability heuristic: luma gap between foreground and background.

Brightness uses the Rec. 601 luma weights. A gap under half of the 0-255 range
is flagged as low contrast. This is not a WCAG contrast ratio. When a gradient
is active only its first stop is compared against the background.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .colors import parse_hex

LOW_CONTRAST_THRESHOLD = 128


@dataclass(frozen=True)
class ContrastAssessment:
    # None means the colors could not be decoded
    is_low_contrast: Optional[bool]

    @property
    def indeterminate(self) -> bool:
        return self.is_low_contrast is None

    @property
    def should_warn(self) -> bool:
        return self.is_low_contrast is not False


def brightness(color: str) -> float:
    r, g, b = parse_hex(color)
    return (r * 299 + g * 587 + b * 114) / 1000


def assess(fg: str, bg: str) -> ContrastAssessment:
    try:
        gap = abs(brightness(fg) - brightness(bg))
    except (ValueError, TypeError):
        return ContrastAssessment(is_low_contrast=None)
    return ContrastAssessment(is_low_contrast=gap < LOW_CONTRAST_THRESHOLD)
