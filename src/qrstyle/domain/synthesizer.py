"""Merge the independent source models into one rendering configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .colors import ColorSpec, FlatColor, GradientColor
from .contrast import ContrastAssessment, assess
from .logo import LogoOptions
from .spec import (
    BackgroundOptions,
    CornerDotOptions,
    CornerSquareOptions,
    Dimensions,
    DotOptions,
    RenderingConfiguration,
)
from .styles import StyleSelection


@dataclass(frozen=True)
class Snapshot:
    """Frozen read of every source model at one instant."""

    content: str
    foreground: ColorSpec
    background: str
    corner_color: str
    styles: StyleSelection
    logo: Optional[LogoOptions]
    dimensions: Dimensions = field(default_factory=Dimensions)

    @classmethod
    def capture(cls, content, colors, styles, logo, dimensions: Dimensions | None = None) -> "Snapshot":
        return cls(
            content=content.value,
            foreground=colors.foreground_spec(),
            background=colors.background,
            corner_color=colors.corner_color(),
            styles=styles,
            logo=logo.options(),
            dimensions=dimensions or Dimensions(),
        )


def _exclusive(fg: ColorSpec) -> ColorSpec:
    # Rebuild from scratch so no caller-supplied object carries both forms.
    if isinstance(fg, GradientColor):
        return GradientColor(kind=fg.kind, stops=tuple(fg.stops), rotation=fg.rotation)
    if isinstance(fg, FlatColor):
        return FlatColor(fg.color)
    raise TypeError(f"unsupported foreground {fg!r}")


def synthesize(snap: Snapshot) -> RenderingConfiguration:
    """Pure: equal snapshots always give equal configurations."""
    return RenderingConfiguration(
        content=snap.content,
        dimensions=snap.dimensions,
        error_correction=snap.styles.error_correction,
        foreground=_exclusive(snap.foreground),
        background=BackgroundOptions(snap.background),
        dots=DotOptions(snap.styles.dot_shape),
        corner_square=CornerSquareOptions(snap.corner_color, snap.styles.corner_square_shape),
        corner_dot=CornerDotOptions(snap.corner_color, snap.styles.corner_dot_shape),
        logo=snap.logo,
    )


def assess_configuration(config: RenderingConfiguration) -> ContrastAssessment:
    return assess(config.foreground.representative, config.background.color)
