"""Tests for the interactive session and coalesced redraw scheduling."""

from collections.abc import Callable

import pytest

from optimal_tau.algorithms.complex_arith import Complex
from optimal_tau.algorithms.solver import compute_optimal_tau
from optimal_tau.data.settings import Settings
from optimal_tau.session import Session
from optimal_tau.visualizations.scene import Scene, Viewport


class FrameQueue:
    """Stand-in for a display refresh scheduler."""

    def __init__(self) -> None:
        self.pending: list[Callable[[], object]] = []

    def __call__(self, callback: Callable[[], object]) -> None:
        self.pending.append(callback)

    def run(self) -> None:
        callbacks, self.pending = self.pending, []
        for callback in callbacks:
            callback()


@pytest.fixture
def frames() -> FrameQueue:
    return FrameQueue()


@pytest.fixture
def scenes() -> list[Scene]:
    return []


@pytest.fixture
def session(frames: FrameQueue, scenes: list[Scene]) -> Session:
    return Session(frames, scenes.append, viewport=Viewport(800, 600))


class TestRedrawScheduling:
    """Tests for the single-slot pending flag."""

    def test_requests_are_coalesced(self, session: Session, frames: FrameQueue) -> None:
        """Repeated edits between frames schedule exactly one pass."""
        session.update_setting("eps", 0.5)
        session.update_setting("fmax", 12)
        session.update_setting("n_freqs", 9)
        assert len(frames.pending) == 1
        assert session.redraw_pending

    def test_pass_uses_latest_settings(
        self, session: Session, frames: FrameQueue, scenes: list[Scene]
    ) -> None:
        session.update_setting("eps", 0.5)
        session.update_setting("n_freqs", 9)
        frames.run()
        assert len(scenes) == 1
        assert scenes[0].settings.eps == 0.5
        assert len(scenes[0].frequency_circles) == 9
        assert not session.redraw_pending
        assert session.last_scene is scenes[0]

    def test_new_request_after_pass(self, session: Session, frames: FrameQueue) -> None:
        session.request_redraw()
        frames.run()
        session.request_redraw()
        assert len(frames.pending) == 1

    def test_resize_requests_redraw(
        self, session: Session, frames: FrameQueue, scenes: list[Scene]
    ) -> None:
        session.resize(Viewport(400, 300, dpr=2.0))
        frames.run()
        assert scenes[-1].width == 800


class TestUpdateSetting:
    """Tests for settings edits."""

    def test_optimal_mode_tracks_band(self, session: Session) -> None:
        """In optimal mode τ follows edits of ε and the band."""
        session.update_setting("eps", 0.5)
        assert session.settings.tau == compute_optimal_tau(0.5, 1.0, 9.0)

    def test_tau_edit_leaves_optimal_mode(self, session: Session) -> None:
        before = session.settings.tau
        session.update_setting("tau_real", "5.0")
        assert not session.settings.optimal
        assert session.settings.tau == Complex(5.0, before.imag)

    def test_unparseable_value_rejected(self, session: Session, frames: FrameQueue) -> None:
        """Garbage input marks the key invalid and changes nothing."""
        before = session.settings
        session.update_setting("n_freqs", "seven")
        assert session.settings == before
        assert session.invalid_keys == {"n_freqs"}
        assert frames.pending == []

    def test_invalid_value_skips_pass(
        self, session: Session, frames: FrameQueue, scenes: list[Scene]
    ) -> None:
        """A parseable but invalid band is stored, flagged, and not drawn."""
        session.update_setting("fmin", 20)
        assert session.invalid_keys == {"fmin"}
        frames.run()
        assert scenes == []
        assert not session.redraw_pending

    def test_fixing_value_clears_invalid(self, session: Session) -> None:
        session.update_setting("fmin", 20)
        session.update_setting("fmin", 2)
        assert session.invalid_keys == frozenset()

    def test_unknown_key_raises(self, session: Session) -> None:
        with pytest.raises(KeyError, match="Unknown setting"):
            session.update_setting("colour", 1)


class TestToggleOptimal:
    """Tests for optimal-mode toggling."""

    def test_toggle_restores_optimal_tau(self, session: Session) -> None:
        session.update_setting("tau_imag", -1.0)
        assert session.toggle_optimal() is True
        assert session.settings.tau == compute_optimal_tau(0.7, 1.0, 9.0)

    def test_toggle_off_keeps_tau(self, session: Session) -> None:
        tau = session.settings.tau
        assert session.toggle_optimal() is False
        assert session.settings.tau == tau

    def test_manual_settings_kept(self, frames: FrameQueue) -> None:
        settings = Settings(tau=Complex(3.0, -2.0), optimal=False)
        session = Session(frames, lambda scene: None, settings=settings)
        assert session.settings.tau == Complex(3.0, -2.0)


class TestEditsWhileInvalid:
    """Tests for edits made while the band is invalid."""

    def test_tau_edit_kept_with_invalid_band(self, session: Session) -> None:
        """A τ edit is stored and leaves optimal mode even if fmin is bad."""
        before = session.settings.tau
        session.update_setting("fmin", 20)
        session.update_setting("tau_real", "5.0")
        assert not session.settings.optimal
        assert session.settings.tau == Complex(5.0, before.imag)
        assert session.invalid_keys == {"fmin"}

    def test_valid_edit_keeps_other_rejected_key(self, session: Session) -> None:
        """Fixing one key does not clear another key's unparseable input."""
        session.update_setting("n_freqs", "seven")
        session.update_setting("eps", 0.5)
        assert session.invalid_keys == {"n_freqs"}

    def test_fixing_band_from_other_edge(self, session: Session) -> None:
        session.update_setting("fmin", 20)
        session.update_setting("fmax", 30)
        assert session.invalid_keys == frozenset()

    def test_toggle_with_invalid_band_keeps_tau(self, session: Session) -> None:
        session.toggle_optimal()
        tau = session.settings.tau
        session.update_setting("fmin", 20)
        assert session.toggle_optimal() is True
        assert session.settings.tau == tau

    def test_public_import(self) -> None:
        import optimal_tau

        assert optimal_tau.Session is Session
