from __future__ import annotations

from typing import Tuple


# Content
INITIAL_CONTENT = "https://printscribe.ph"
FALLBACK_CONTENT = "https://printscribe.com"

# Symbol geometry handed to the renderer (width, height, quiet-zone margin)
DEFAULT_WIDTH = 400
DEFAULT_HEIGHT = 400
DEFAULT_MARGIN = 10

# Colors
DEFAULT_FOREGROUND = "#000000"
DEFAULT_BACKGROUND = "#FFFFFF"
DEFAULT_GRADIENT_SECOND_COLOR = "#FFD700"
BRAND_ACCENT = "#FFD700"

# Logo
DEFAULT_LOGO_SIZE = 0.4
LOGO_SIZE_RANGE: Tuple[float, float] = (0.2, 0.5)
DEFAULT_LOGO_MARGIN = 10
LOGO_MARGIN_RANGE: Tuple[int, int] = (0, 20)

# Export
EXPORT_BASENAME = "printscribe-qr"
EXPORT_FORMATS: Tuple[str, ...] = ("png", "svg")


class _Singleton(type):
    _instances = {}
    def __call__(cls, *args, **kwargs):
        if cls not in cls._instances:
            cls._instances[cls] = super(_Singleton, cls).__call__(*args, **kwargs)
        return cls._instances[cls]

class AppConfig(metaclass=_Singleton):
    title: str = "QR Style Studio"
    min_width: int = 980
    min_height: int = 640
    preview_max: int = 400  # px
    poll_ms: int = 50  # logo loader completion polling
