"""Interactive session: settings ownership and coalesced redraws.

The session owns the single mutable copy of the settings. Input handlers
call ``update_setting``/``toggle_optimal``/``resize``; each of these
requests a redraw. Requests are coalesced through a single pending flag,
so any number of edits between two frames schedule exactly one pass.

The frame scheduler is injected (e.g. ``QTimer.singleShot(0, cb)`` in a
Qt front end, or an immediate call in tests). A pass snapshots the
settings, builds a ``Scene`` and hands it to the ``on_scene`` sink.
Invalid settings make the pass log a warning and skip drawing.

Example:
    >>> frames = []
    >>> session = Session(frames.append, print)
    >>> session.update_setting("eps", 0.5)
    >>> session.update_setting("fmax", 12)
    >>> len(frames)   # both edits share one scheduled frame
    1
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from optimal_tau.data.settings import DEFAULT_SETTINGS, Settings
from optimal_tau.data.style import DEFAULT_STYLE, RenderStyle
from optimal_tau.errors import DomainError, RangeError
from optimal_tau.visualizations.scene import Scene, Viewport, build_scene

logger = logging.getLogger(__name__)

DEFAULT_VIEWPORT = Viewport(800, 600)

FrameScheduler = Callable[[Callable[[], None]], Any]
"""Calls its argument once, on the next display refresh."""


class Session:
    """Mutable settings holder with single-slot redraw scheduling."""

    __slots__ = (
        "_settings",
        "_viewport",
        "_style",
        "_schedule_frame",
        "_on_scene",
        "_redraw_pending",
        "_rejected_keys",
        "_invalid_keys",
        "_last_scene",
    )

    def __init__(
        self,
        schedule_frame: FrameScheduler,
        on_scene: Callable[[Scene], Any],
        *,
        settings: Settings = DEFAULT_SETTINGS,
        viewport: Viewport = DEFAULT_VIEWPORT,
        style: RenderStyle = DEFAULT_STYLE,
    ) -> None:
        """Initialize the session.

        Args:
            schedule_frame: Frame scheduler used by ``request_redraw``.
            on_scene: Receives every successfully built scene.
            settings: Initial settings (τ is resolved if in optimal mode).
            viewport: Initial drawing surface.
            style: Render style.
        """
        self._settings = settings.resolved() if settings.optimal else settings
        self._viewport = viewport
        self._style = style
        self._schedule_frame = schedule_frame
        self._on_scene = on_scene
        self._redraw_pending = False
        self._rejected_keys: set[str] = set()
        self._invalid_keys: set[str] = set()
        self._last_scene: Scene | None = None

    @property
    def settings(self) -> Settings:
        """Current settings snapshot."""
        return self._settings

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def redraw_pending(self) -> bool:
        """True between ``request_redraw`` and the end of the next pass."""
        return self._redraw_pending

    @property
    def invalid_keys(self) -> frozenset[str]:
        """Settings keys whose last edit was rejected or left the settings invalid."""
        return frozenset(self._rejected_keys | self._invalid_keys)

    @property
    def last_scene(self) -> Scene | None:
        """Scene produced by the most recent successful pass."""
        return self._last_scene

    def update_setting(self, key: str, value: Any) -> None:
        """Apply a user edit and request a redraw.

        Unparseable values are rejected and leave the settings untouched.
        Parseable values that make the settings invalid (e.g. fmin >= fmax)
        are stored, the key is marked invalid and the next pass is skipped.
        """
        try:
            updated = self._settings.with_value(key, value)
        except ValueError as exc:
            logger.warning("Rejected %s=%r: %s", key, value, exc)
            self._rejected_keys.add(key)
            return

        self._rejected_keys.discard(key)
        try:
            updated.validate()
        except (DomainError, RangeError) as exc:
            logger.warning("Invalid %s=%r: %s", key, value, exc)
            failing = updated.failing_keys()
            self._invalid_keys = {k for k in self._invalid_keys | {key} if k in failing}
        else:
            self._invalid_keys.clear()
            if updated.optimal:
                updated = updated.with_optimal_tau()

        self._settings = updated
        self.request_redraw()

    def toggle_optimal(self) -> bool:
        """Switch optimal mode; returns the new mode."""
        optimal = not self._settings.optimal
        settings = replace(self._settings, optimal=optimal)
        if optimal and not settings.failing_keys():
            settings = settings.with_optimal_tau()
        self._settings = settings
        logger.info("Optimal mode %s", "on" if optimal else "off")
        self.request_redraw()
        return optimal

    def resize(self, viewport: Viewport) -> None:
        """Change the drawing surface and request a redraw."""
        self._viewport = viewport
        self.request_redraw()

    def request_redraw(self) -> None:
        """Schedule a pass unless one is already pending."""
        if self._redraw_pending:
            return
        self._redraw_pending = True
        self._schedule_frame(self.redraw)

    def redraw(self) -> Scene | None:
        """Run one pass on the current snapshot.

        Returns:
            The scene, or None if the settings are invalid.
        """
        snapshot = self._settings
        try:
            scene = build_scene(snapshot, self._viewport, self._style)
        except (DomainError, RangeError) as exc:
            logger.warning("Skipping redraw: %s", exc)
            return None
        finally:
            self._redraw_pending = False

        self._last_scene = scene
        self._on_scene(scene)
        return scene


__all__ = ["DEFAULT_VIEWPORT", "FrameScheduler", "Session"]
