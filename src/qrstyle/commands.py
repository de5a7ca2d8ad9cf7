from __future__ import annotations

from concurrent.futures import Future
from pathlib import Path
from typing import Callable, Optional, Protocol

from .errors import ExportError, ImageDecodeError
from .events import EventBus
from .services.ingest import LogoLoader
from .session import DesignSession


class Command(Protocol):
    def execute(self): ...


class ExportQRCommand:
    """Export the current configuration; ``ask_path`` returns '' on cancel."""

    def __init__(self, session: DesignSession, fmt: str, ask_path: Callable[[str], str], bus: EventBus):
        self.session = session
        self.fmt = fmt
        self.ask_path = ask_path
        self.bus = bus

    def execute(self) -> Optional[Path]:
        try:
            artifact = self.session.export(self.fmt)
        except ExportError as e:
            self.bus.publish(f"ERROR exporting: {e}")
            raise
        path = self.ask_path(artifact.filename)
        if not path:
            return None
        try:
            Path(path).write_bytes(artifact.data)
        except OSError as e:
            self.bus.publish(f"ERROR saving: {e}")
            raise ExportError(f"Could not write {path}: {e}") from e
        self.bus.publish(f"Saved {self.fmt.upper()} to {path}")
        return Path(path)


class ApplyPresetCommand:
    def __init__(self, session: DesignSession):
        self.session = session

    def execute(self) -> None:
        self.session.apply_branding_preset()


class LoadLogoCommand:
    """Start a background logo read; ``finish`` must run on the UI thread."""

    def __init__(self, session: DesignSession, loader: LogoLoader, path: str, bus: EventBus):
        self.session = session
        self.loader = loader
        self.path = path
        self.bus = bus
        self.token: Optional[int] = None
        self.future: Optional[Future] = None

    def execute(self) -> Future:
        self.token = self.session.begin_logo_load()
        self.future = self.loader.submit(self.path)
        self.bus.publish(f"Loading logo {Path(self.path).name}...")
        return self.future

    def done(self) -> bool:
        return self.future is not None and self.future.done()

    def finish(self) -> bool:
        try:
            payload = self.future.result()
        except ImageDecodeError as e:
            self.session.fail_logo_load(self.token, e)
            return False
        applied = self.session.complete_logo_load(self.token, payload)
        if applied:
            self.bus.publish(f"Logo loaded from {Path(self.path).name}.")
        return applied
