from __future__ import annotations


class QRStyleError(Exception):
    """Base class for recoverable studio errors."""


class ImageDecodeError(QRStyleError):
    """An uploaded logo could not be read as an image."""


class ExportError(QRStyleError):
    """The renderer could not produce the requested artifact."""


class RenderError(QRStyleError):
    """The renderer rejected a configuration (e.g. content too long)."""
