"""Foreground/background colors and the optional two-stop gradient.

The model has two modes, FLAT and GRADIENT. In FLAT mode the foreground is a
single color; in GRADIENT mode the foreground color is stop 0 and a secondary
color is stop 1. ``foreground_spec()`` always returns exactly one of the two
representations.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from ..config import DEFAULT_BACKGROUND, DEFAULT_FOREGROUND, DEFAULT_GRADIENT_SECOND_COLOR
from .styles import GradientKind

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def parse_hex(color: str) -> Tuple[int, int, int]:
    """Decode ``#RRGGBB`` (or ``#RGB``) into 8-bit channels.

    Raises:
        ValueError: if ``color`` is not a hex color.
    """
    m = _HEX_RE.match(color.strip()) if isinstance(color, str) else None
    if m is None:
        raise ValueError(f"Not a hex color: {color!r}")
    digits = m.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    rgb = int(digits, 16)
    return (rgb >> 16) & 0xFF, (rgb >> 8) & 0xFF, rgb & 0xFF


def normalize_hex(text: str) -> Optional[str]:
    """Canonical ``#RRGGBB`` for user input, or None if it is not a hex color."""
    try:
        r, g, b = parse_hex(text)
    except ValueError:
        return None
    return f"#{r:02X}{g:02X}{b:02X}"


class ColorMode(str, Enum):
    FLAT = "flat"
    GRADIENT = "gradient"


@dataclass(frozen=True)
class FlatColor:
    color: str
    mode = ColorMode.FLAT

    @property
    def representative(self) -> str:
        return self.color


@dataclass(frozen=True)
class GradientStop:
    offset: float
    color: str


@dataclass(frozen=True)
class GradientColor:
    kind: GradientKind
    stops: Tuple[GradientStop, GradientStop]
    rotation: float = 0.0
    mode = ColorMode.GRADIENT

    def __post_init__(self):
        if len(self.stops) != 2 or self.stops[0].offset != 0 or self.stops[1].offset != 1:
            raise ValueError("gradient needs exactly two stops at offsets 0 and 1")

    @property
    def representative(self) -> str:
        # contrast is judged on the first stop only
        return self.stops[0].color


ColorSpec = Union[FlatColor, GradientColor]


class ColorModel:
    """Primary colors plus the FLAT/GRADIENT state machine."""

    def __init__(self,
                 foreground: str = DEFAULT_FOREGROUND,
                 background: str = DEFAULT_BACKGROUND,
                 second_color: str = DEFAULT_GRADIENT_SECOND_COLOR) -> None:
        self.foreground = foreground
        self.background = background
        self.mode = ColorMode.FLAT
        self.gradient_kind = GradientKind.LINEAR
        self.second_color = second_color
        self.default_second_color = second_color
        self.corner_override: Optional[str] = None

    @property
    def gradient_enabled(self) -> bool:
        return self.mode is ColorMode.GRADIENT

    def set_foreground(self, color: str) -> None:
        self.foreground = color
        # corners follow the foreground again once the user picks a color
        self.corner_override = None

    def set_background(self, color: str) -> None:
        self.background = color

    def set_gradient_enabled(self, enabled: bool) -> None:
        if enabled and self.mode is ColorMode.FLAT:
            self.mode = ColorMode.GRADIENT
        elif not enabled and self.mode is ColorMode.GRADIENT:
            # stop 1 and kind are discarded with the gradient
            self.mode = ColorMode.FLAT
            self.second_color = self.default_second_color
            self.gradient_kind = GradientKind.LINEAR

    def set_gradient_kind(self, kind) -> None:
        if self.gradient_enabled:
            self.gradient_kind = GradientKind(kind)

    def set_gradient_second_color(self, color: str) -> None:
        if self.gradient_enabled:
            self.second_color = color

    def set_corner_override(self, color: Optional[str]) -> None:
        self.corner_override = color

    def corner_color(self) -> str:
        """Corner squares and dots track the foreground unless overridden."""
        return self.corner_override or self.foreground

    def foreground_spec(self) -> ColorSpec:
        if self.mode is ColorMode.GRADIENT:
            return GradientColor(
                kind=self.gradient_kind,
                stops=(GradientStop(0, self.foreground), GradientStop(1, self.second_color)),
            )
        return FlatColor(self.foreground)
