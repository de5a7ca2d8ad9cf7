from __future__ import annotations

from dataclasses import dataclass

from ..config import BRAND_ACCENT, DEFAULT_BACKGROUND, DEFAULT_FOREGROUND
from .colors import ColorModel
from .styles import CornerDotShape, CornerSquareShape, DotShape, StyleSelection


@dataclass(frozen=True)
class BrandingPreset:
    name: str
    foreground: str
    background: str
    accent: str
    dot_shape: DotShape
    corner_square_shape: CornerSquareShape
    corner_dot_shape: CornerDotShape


PRINTSCRIBE = BrandingPreset(
    name="PrintScribe",
    foreground=DEFAULT_FOREGROUND,
    background=DEFAULT_BACKGROUND,
    accent=BRAND_ACCENT,
    dot_shape=DotShape.ROUNDED,
    corner_square_shape=CornerSquareShape.EXTRA_ROUNDED,
    corner_dot_shape=CornerDotShape.DOT,
)


def apply_branding_preset(colors: ColorModel, styles: StyleSelection,
                          preset: BrandingPreset = PRINTSCRIBE) -> StyleSelection:
    """Overwrite colors in place and return the new style selection.

    Corner colors take the preset accent instead of tracking the foreground.
    Callers must wrap this in a single session commit.
    """
    colors.set_gradient_enabled(False)
    colors.set_foreground(preset.foreground)
    colors.set_background(preset.background)
    colors.set_corner_override(preset.accent)
    return StyleSelection(
        dot_shape=preset.dot_shape,
        corner_square_shape=preset.corner_square_shape,
        corner_dot_shape=preset.corner_dot_shape,
        error_correction=styles.error_correction,
    )
