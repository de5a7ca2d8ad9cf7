from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Dict


class ErrorCorrection(str, Enum):
    L = "L"  # ~7%
    M = "M"  # ~15%
    Q = "Q"  # ~25%
    H = "H"  # ~30%

    @property
    def rank(self) -> int:
        return "LMQH".index(self.value)


class DotShape(str, Enum):
    SQUARE = "square"
    DOTS = "dots"
    ROUNDED = "rounded"
    EXTRA_ROUNDED = "extra-rounded"
    CLASSY = "classy"
    CLASSY_ROUNDED = "classy-rounded"


class CornerSquareShape(str, Enum):
    SQUARE = "square"
    DOT = "dot"
    EXTRA_ROUNDED = "extra-rounded"


class CornerDotShape(str, Enum):
    SQUARE = "square"
    DOT = "dot"


class GradientKind(str, Enum):
    LINEAR = "linear"
    RADIAL = "radial"


@dataclass(frozen=True)
class StyleSelection:
    """Categorical choices; each field is replaced independently."""

    dot_shape: DotShape = DotShape.ROUNDED
    corner_square_shape: CornerSquareShape = CornerSquareShape.EXTRA_ROUNDED
    corner_dot_shape: CornerDotShape = CornerDotShape.DOT
    error_correction: ErrorCorrection = ErrorCorrection.M

    def with_dot_shape(self, shape) -> "StyleSelection":
        return replace(self, dot_shape=DotShape(shape))

    def with_corner_square_shape(self, shape) -> "StyleSelection":
        return replace(self, corner_square_shape=CornerSquareShape(shape))

    def with_corner_dot_shape(self, shape) -> "StyleSelection":
        return replace(self, corner_dot_shape=CornerDotShape(shape))

    def with_error_correction(self, level) -> "StyleSelection":
        return replace(self, error_correction=ErrorCorrection(level))

    def as_values(self) -> Dict[str, str]:
        """Wire value per field, for widgets bound to the selection."""
        return {f.name: getattr(self, f.name).value for f in fields(self)}
