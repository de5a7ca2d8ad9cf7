"""The rendering configuration handed to the symbol renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..config import DEFAULT_HEIGHT, DEFAULT_MARGIN, DEFAULT_WIDTH
from .colors import ColorSpec, FlatColor, GradientColor
from .logo import LogoOptions
from .styles import CornerDotShape, CornerSquareShape, DotShape, ErrorCorrection


@dataclass(frozen=True)
class Dimensions:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    margin: int = DEFAULT_MARGIN

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be positive")
        if self.margin < 0:
            raise ValueError("margin must not be negative")


@dataclass(frozen=True)
class BackgroundOptions:
    color: str


@dataclass(frozen=True)
class DotOptions:
    shape: DotShape


@dataclass(frozen=True)
class CornerSquareOptions:
    color: str
    shape: CornerSquareShape


@dataclass(frozen=True)
class CornerDotOptions:
    color: str
    shape: CornerDotShape


@dataclass(frozen=True)
class RenderingConfiguration:
    content: str
    error_correction: ErrorCorrection
    foreground: ColorSpec
    background: BackgroundOptions
    dots: DotOptions
    corner_square: CornerSquareOptions
    corner_dot: CornerDotOptions
    logo: Optional[LogoOptions] = None
    dimensions: Dimensions = field(default_factory=Dimensions)

    def __post_init__(self):
        if not self.content:
            raise ValueError("content must not be empty")
        if not isinstance(self.foreground, (FlatColor, GradientColor)):
            raise TypeError(f"foreground must be FlatColor or GradientColor, got {type(self.foreground).__name__}")

    @property
    def gradient(self) -> Optional[GradientColor]:
        return self.foreground if isinstance(self.foreground, GradientColor) else None

    @property
    def flat_color(self) -> Optional[str]:
        return self.foreground.color if isinstance(self.foreground, FlatColor) else None

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict view; exactly one of ``dots.color``/``dots.gradient`` is set."""
        gradient = self.gradient
        out: Dict[str, Any] = {
            "data": self.content,
            "width": self.dimensions.width,
            "height": self.dimensions.height,
            "margin": self.dimensions.margin,
            "qrOptions": {"errorCorrectionLevel": self.error_correction.value},
            "dotsOptions": {
                "type": self.dots.shape.value,
                "color": self.flat_color,
                "gradient": None if gradient is None else {
                    "type": gradient.kind.value,
                    "rotation": gradient.rotation,
                    "colorStops": [{"offset": s.offset, "color": s.color} for s in gradient.stops],
                },
            },
            "backgroundOptions": {"color": self.background.color},
            "cornersSquareOptions": {"color": self.corner_square.color, "type": self.corner_square.shape.value},
            "cornersDotOptions": {"color": self.corner_dot.color, "type": self.corner_dot.shape.value},
        }
        if self.logo is not None:
            out["image"] = self.logo.image_data
            out["imageOptions"] = {
                "imageSize": self.logo.relative_size,
                "margin": self.logo.margin,
                "hideBackgroundDots": self.logo.hide_background_dots,
            }
        return out
