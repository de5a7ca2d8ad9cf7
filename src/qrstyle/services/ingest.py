"""Asynchronous logo ingestion: file on disk -> PNG data URI."""

from __future__ import annotations

import base64
import io
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

from ..errors import ImageDecodeError

log = logging.getLogger(__name__)

MAX_LOGO_SIDE = 1024  # px; larger uploads are downscaled before encoding


def read_logo(path: Union[str, Path]) -> str:
    """Decode an image file and re-encode it as a base64 PNG data URI.

    Raises:
        ImageDecodeError: if the file is missing or is not a readable image.
    """
    path = Path(path)
    try:
        with Image.open(path) as img:
            img.load()
            img = img.convert("RGBA")
    except FileNotFoundError as e:
        raise ImageDecodeError(f"Logo not found: {path}") from e
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as e:
        raise ImageDecodeError(f"Could not read image '{path.name}': {e}") from e

    img.thumbnail((MAX_LOGO_SIDE, MAX_LOGO_SIDE), Image.LANCZOS)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    log.debug("logo %s decoded (%dx%d, %d bytes)", path.name, img.size[0], img.size[1], buf.tell())
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


class LogoLoader:
    """Single-shot background reads; callers own staleness checks."""

    def __init__(self, executor: ThreadPoolExecutor | None = None) -> None:
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="logo")

    def submit(self, path: Union[str, Path]) -> "Future[str]":
        return self._executor.submit(read_logo, path)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
