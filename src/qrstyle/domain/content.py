from __future__ import annotations

from ..config import FALLBACK_CONTENT, INITIAL_CONTENT


class ContentField:
    """Raw payload typed by the user; ``value`` is never empty.

    Whitespace-only text counts as empty and also yields the fallback.
    """

    def __init__(self, text: str = INITIAL_CONTENT, fallback: str = FALLBACK_CONTENT) -> None:
        self.raw = text
        self.fallback = fallback

    def set_text(self, text: str | None) -> None:
        self.raw = text or ""

    @property
    def value(self) -> str:
        # whitespace-only input would encode an invisible symbol
        return self.raw if self.raw.strip() else self.fallback
