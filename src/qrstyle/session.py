"""Holds the source models and publishes one configuration per commit.

Every mutator changes exactly one source model and then commits. A commit
synthesizes a fresh configuration from a snapshot of all models, and only a
complete configuration ever reaches the renderer or the listeners. Group
several mutations with ``batch()`` to publish them as a single commit.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional

from .domain.colors import ColorModel
from .domain.content import ContentField
from .domain.contrast import ContrastAssessment
from .domain.logo import LogoModel
from .domain.presets import PRINTSCRIBE, BrandingPreset, apply_branding_preset
from .domain.spec import RenderingConfiguration
from .domain.styles import StyleSelection
from .domain.synthesizer import Snapshot, assess_configuration, synthesize
from .errors import QRStyleError
from .events import EventBus

log = logging.getLogger(__name__)

Listener = Callable[[RenderingConfiguration, ContrastAssessment], None]


class DesignSession:
    def __init__(self, renderer=None, bus: Optional[EventBus] = None) -> None:
        self.content = ContentField()
        self.colors = ColorModel()
        self.styles = StyleSelection()
        self.logo = LogoModel()
        self.bus = bus or EventBus()
        self.renderer = renderer
        self.version = 0
        self._listeners: List[Listener] = []
        self._batch_depth = 0
        self._dirty = False
        self._logo_token = 0

        self._config = synthesize(self.snapshot())
        self._handle = renderer.initialize(self._config) if renderer is not None else None

    # --------------- Observation ----------------
    @property
    def config(self) -> RenderingConfiguration:
        return self._config

    @property
    def contrast(self) -> ContrastAssessment:
        return assess_configuration(self._config)

    @property
    def handle(self):
        return self._handle

    def subscribe(self, fn: Listener) -> None:
        self._listeners.append(fn)

    def snapshot(self) -> Snapshot:
        return Snapshot.capture(self.content, self.colors, self.styles, self.logo)

    # --------------- Commit machinery ----------------
    @contextmanager
    def batch(self) -> Iterator["DesignSession"]:
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and self._dirty:
                self._commit()

    def _commit(self) -> None:
        if self._batch_depth:
            self._dirty = True
            return
        self._dirty = False
        try:
            config = synthesize(self.snapshot())
        except (ValueError, TypeError) as e:
            self.bus.publish(f"ERROR building configuration: {e}")
            return
        if config == self._config:
            return
        self._config = config
        self.version += 1
        assessment = assess_configuration(config)
        log.debug("configuration v%d committed (low_contrast=%s)", self.version, assessment.is_low_contrast)
        if self.renderer is not None:
            try:
                self.renderer.update(self._handle, config)
            except QRStyleError as e:
                self.bus.publish(f"ERROR rendering preview: {e}")
        for fn in list(self._listeners):
            fn(config, assessment)

    # --------------- Content ----------------
    def set_content(self, text: str) -> None:
        self.content.set_text(text)
        self._commit()

    # --------------- Colors ----------------
    def set_foreground(self, color: str) -> None:
        self.colors.set_foreground(color)
        self._commit()

    def set_background(self, color: str) -> None:
        self.colors.set_background(color)
        self._commit()

    def set_gradient_enabled(self, enabled: bool) -> None:
        self.colors.set_gradient_enabled(enabled)
        self._commit()

    def set_gradient_kind(self, kind) -> None:
        self.colors.set_gradient_kind(kind)
        self._commit()

    def set_gradient_second_color(self, color: str) -> None:
        self.colors.set_gradient_second_color(color)
        self._commit()

    # --------------- Styles ----------------
    def set_dot_shape(self, shape) -> None:
        self.styles = self.styles.with_dot_shape(shape)
        self._commit()

    def set_corner_square_shape(self, shape) -> None:
        self.styles = self.styles.with_corner_square_shape(shape)
        self._commit()

    def set_corner_dot_shape(self, shape) -> None:
        self.styles = self.styles.with_corner_dot_shape(shape)
        self._commit()

    def set_error_correction(self, level) -> None:
        self.styles = self.styles.with_error_correction(level)
        self._commit()

    # --------------- Logo ----------------
    def set_logo(self, payload: str) -> None:
        self.logo.set_logo(payload)
        self._commit()

    def clear_logo(self) -> None:
        # a pending upload must not resurrect the logo
        self._logo_token += 1
        self.logo.clear_logo()
        self._commit()

    def set_logo_size(self, value: float) -> None:
        self.logo.set_relative_size(value)
        self._commit()

    def set_logo_margin(self, value: int) -> None:
        self.logo.set_margin(value)
        self._commit()

    def begin_logo_load(self) -> int:
        """Reserve a token for an upload; older pending uploads become stale."""
        self._logo_token += 1
        return self._logo_token

    def complete_logo_load(self, token: int, payload: str) -> bool:
        if token != self._logo_token:
            log.debug("discarding stale logo load %d (current %d)", token, self._logo_token)
            return False
        self.set_logo(payload)
        return True

    def fail_logo_load(self, token: int, error: Exception) -> None:
        if token != self._logo_token:
            return
        self.bus.publish(f"ERROR loading logo: {error}")

    # --------------- Presets ----------------
    def apply_branding_preset(self, preset: BrandingPreset = PRINTSCRIBE) -> None:
        with self.batch():
            self.styles = apply_branding_preset(self.colors, self.styles, preset)
            self._commit()
        self.bus.publish(f"Applied {preset.name} branding.")

    # --------------- Export ----------------
    def export(self, fmt: str):
        if self.renderer is None:
            raise QRStyleError("No renderer attached")
        return self.renderer.export(self._handle, fmt)
