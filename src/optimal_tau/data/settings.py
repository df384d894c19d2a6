"""
Settings - Single Source of Truth for one computation pass

A ``Settings`` value is an immutable snapshot of everything the user can
edit: the frequency band, the number of sampled frequencies, the damping
ratio ε, τ and whether τ tracks its optimal value. Each redraw reads one
snapshot; edits produce a new snapshot via ``dataclasses.replace``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from optimal_tau.algorithms.complex_arith import Complex
from optimal_tau.algorithms.geometry import check_band, check_eps, check_tau
from optimal_tau.algorithms.solver import compute_optimal_tau
from optimal_tau.errors import DomainError, RangeError

# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_FMIN: float = 1.0
DEFAULT_FMAX: float = 9.0
DEFAULT_EPS: float = 0.7
DEFAULT_N_FREQS: int = 7

EDITABLE_KEYS: dict[str, type] = {
    "tau_real": float,
    "tau_imag": float,
    "fmin": float,
    "fmax": float,
    "n_freqs": int,
    "eps": float,
}
"""User-editable fields and the type their input is parsed as."""

TAU_KEYS: frozenset[str] = frozenset({"tau_real", "tau_imag"})
"""Editing one of these leaves optimal mode."""


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable settings snapshot."""

    fmin: float = DEFAULT_FMIN
    """Lower edge of the frequency band."""

    fmax: float = DEFAULT_FMAX
    """Upper edge of the frequency band."""

    n_freqs: int = DEFAULT_N_FREQS
    """Number of sampled frequencies (>= 2)."""

    eps: float = DEFAULT_EPS
    """Damping ratio ε (> 0)."""

    tau: Complex | None = None
    """Relaxation parameter; ``None`` means "use the optimal τ"."""

    optimal: bool = True
    """Whether τ tracks the optimal value for (ε, fmin, fmax)."""

    def validate(self) -> None:
        """Check every field.

        Raises:
            DomainError: Degenerate band, n_freqs < 2 or Im(τ) == 0.
            RangeError: If ε <= 0.
        """
        check_band(self.fmin, self.fmax)
        if self.n_freqs < 2:
            raise DomainError(f"n_freqs must be at least 2, got {self.n_freqs}")
        check_eps(self.eps)
        if self.tau is not None:
            check_tau(self.tau)

    def failing_keys(self) -> frozenset[str]:
        """Editable keys involved in a failed check (empty when valid)."""
        failing: set[str] = set()
        checks = [
            (lambda: check_band(self.fmin, self.fmax), {"fmin", "fmax"}),
            (lambda: check_eps(self.eps), {"eps"}),
        ]
        if self.tau is not None:
            checks.append((lambda: check_tau(self.tau), {"tau_imag"}))
        for check, keys in checks:
            try:
                check()
            except (DomainError, RangeError):
                failing |= keys
        if self.n_freqs < 2:
            failing.add("n_freqs")
        return frozenset(failing)

    def resolved(self) -> Settings:
        """Return a snapshot with a concrete τ.

        In optimal mode (or when no τ was given) τ is recomputed from
        (ε, fmin, fmax); otherwise the snapshot is returned unchanged.
        """
        if self.optimal or self.tau is None:
            return self.with_optimal_tau()
        return self

    def with_optimal_tau(self) -> Settings:
        """Return a copy whose τ is the optimal τ for the current band."""
        return replace(self, tau=compute_optimal_tau(self.eps, self.fmin, self.fmax))

    def with_value(self, key: str, value: Any) -> Settings:
        """Return a copy with one editable field changed.

        Editing ``tau_real`` or ``tau_imag`` switches optimal mode off.

        Raises:
            KeyError: If ``key`` is not editable.
            ValueError: If ``value`` cannot be parsed as the field's type.
        """
        if key not in EDITABLE_KEYS:
            valid = list(EDITABLE_KEYS)
            raise KeyError(f"Unknown setting: '{key}'. Valid: {valid}")
        parsed = EDITABLE_KEYS[key](value)

        if key in TAU_KEYS:
            # Start from the stored τ; resolving needs a valid band.
            tau = self.tau if self.tau is not None else self.resolved().tau
            assert tau is not None
            if key == "tau_real":
                tau = Complex(parsed, tau.imag)
            else:
                tau = Complex(tau.real, parsed)
            return replace(self, tau=tau, optimal=False)
        return replace(self, **{key: parsed})

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        tau = self.resolved().tau
        assert tau is not None
        return {
            "fmin": self.fmin,
            "fmax": self.fmax,
            "n_freqs": self.n_freqs,
            "eps": self.eps,
            "tau_real": tau.real,
            "tau_imag": tau.imag,
            "optimal": self.optimal,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Settings:
        """Build settings from a ``to_dict`` mapping (missing keys use defaults)."""
        tau = None
        if "tau_real" in data and "tau_imag" in data:
            tau = Complex(float(data["tau_real"]), float(data["tau_imag"]))
        return cls(
            fmin=float(data.get("fmin", DEFAULT_FMIN)),
            fmax=float(data.get("fmax", DEFAULT_FMAX)),
            n_freqs=int(data.get("n_freqs", DEFAULT_N_FREQS)),
            eps=float(data.get("eps", DEFAULT_EPS)),
            tau=tau,
            optimal=bool(data.get("optimal", tau is None)),
        )


DEFAULT_SETTINGS = Settings()
"""Band [1, 9], ε = 0.7, seven frequencies, optimal τ."""


__all__ = [
    "DEFAULT_EPS",
    "DEFAULT_FMAX",
    "DEFAULT_FMIN",
    "DEFAULT_N_FREQS",
    "DEFAULT_SETTINGS",
    "EDITABLE_KEYS",
    "Settings",
    "TAU_KEYS",
]
