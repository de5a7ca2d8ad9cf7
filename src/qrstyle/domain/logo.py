from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config import DEFAULT_LOGO_MARGIN, DEFAULT_LOGO_SIZE, LOGO_MARGIN_RANGE, LOGO_SIZE_RANGE


@dataclass(frozen=True)
class LogoOptions:
    image_data: str  # data URI
    relative_size: float = DEFAULT_LOGO_SIZE
    margin: int = DEFAULT_LOGO_MARGIN
    hide_background_dots: bool = True


def _clamp(value, bounds):
    lo, hi = bounds
    return max(lo, min(hi, value))


class LogoModel:
    """Optional embedded image with its size and margin.

    Size and margin are remembered while no image is loaded, but ``options()``
    only reports them once a payload exists.
    """

    def __init__(self, relative_size: float = DEFAULT_LOGO_SIZE, margin: int = DEFAULT_LOGO_MARGIN,
                 hide_background_dots: bool = True) -> None:
        self.payload: Optional[str] = None
        self.relative_size = _clamp(float(relative_size), LOGO_SIZE_RANGE)
        self.margin = _clamp(int(margin), LOGO_MARGIN_RANGE)
        self.hide_background_dots = hide_background_dots

    @property
    def has_image(self) -> bool:
        return self.payload is not None

    def set_logo(self, payload: str) -> None:
        if not payload:
            raise ValueError("logo payload is empty")
        self.payload = payload

    def clear_logo(self) -> None:
        self.payload = None

    def set_relative_size(self, value: float) -> None:
        self.relative_size = _clamp(float(value), LOGO_SIZE_RANGE)

    def set_margin(self, value: int) -> None:
        self.margin = _clamp(int(round(float(value))), LOGO_MARGIN_RANGE)

    def options(self) -> Optional[LogoOptions]:
        if self.payload is None:
            return None
        return LogoOptions(
            image_data=self.payload,
            relative_size=self.relative_size,
            margin=self.margin,
            hide_background_dots=self.hide_background_dots,
        )
