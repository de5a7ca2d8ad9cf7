from __future__ import annotations

import logging
from typing import Callable, List


class EventBus:
    def __init__(self) -> None:
        self._subs: List[Callable[[str], None]] = []
    def subscribe(self, fn: Callable[[str], None]) -> None:
        self._subs.append(fn)
    def publish(self, message: str) -> None:
        for fn in list(self._subs):
            fn(message)


class LogBridge:
    """Bus subscriber that mirrors console messages into ``logging``."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("qrstyle")

    def write(self, message: str) -> None:
        if message.startswith(("ERROR", "WARNING")):
            self.logger.warning(message)
        else:
            self.logger.info(message)


def setup_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger("qrstyle")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-7s [%(name)s] %(message)s", "%H:%M:%S"))
        logger.addHandler(handler)
    return logger
