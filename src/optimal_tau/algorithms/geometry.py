"""Frequency-to-circle mapping.

Every real frequency f is mapped to a complex angular frequency

    ω(f, ε) = 2πf − i·2πf·ε

and, together with τ, to a circle through a Möbius-style transform:

    center(f) = (½ + i·Re(τ)/(2·Im(τ))) − ω/(ω − τ)
    radius    = |τ| / (2·|Im(τ)|)              (same for every f)

All centers lie on the main circle

    C = i·ε|τ|² / (2·Im(τ)·(Im(τ) + ε·Re(τ)))
    R = sqrt(|τ|²(ε² + 1) / (4·(Im(τ) + ε·Re(τ))²))

Degenerate inputs (Im(τ) == 0, Im(τ) + ε·Re(τ) == 0, ω == τ) raise
``DomainError`` rather than producing non-finite geometry.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from optimal_tau.algorithms.complex_arith import (
    Complex,
    cabs,
    cabs_squared,
    divide,
    subtract,
)
from optimal_tau.errors import DomainError, RangeError

if TYPE_CHECKING:
    from numpy.typing import NDArray


@dataclass(frozen=True, slots=True)
class Circle:
    """Circle in the complex plane."""

    center: Complex
    """Center point."""

    radius: float
    """Radius (always >= 0)."""

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"center": self.center.to_dict(), "radius": self.radius}


def check_eps(eps: float) -> None:
    """Raise ``RangeError`` unless ε is strictly positive."""
    if not eps > 0:
        raise RangeError(f"eps must be positive, got {eps}")


def check_tau(tau: Complex) -> None:
    """Raise ``DomainError`` if τ has no imaginary part."""
    if tau.imag == 0:
        raise DomainError(f"tau must have a nonzero imaginary part, got {tau}")


def check_band(fmin: float, fmax: float) -> None:
    """Raise ``DomainError`` unless fmin < fmax."""
    if not fmin < fmax:
        raise DomainError(f"fmin must be smaller than fmax, got [{fmin}, {fmax}]")


def linspace(start: float, stop: float, n: int) -> NDArray[np.float64]:
    """Return ``n`` linearly spaced values over [start, stop], both ends included.

    Raises:
        DomainError: If ``n < 2``; a single point has no spacing.
    """
    if n < 2:
        raise DomainError(f"need at least 2 samples, got {n}")
    return np.linspace(start, stop, n, dtype=np.float64)


def frequency_sample(fmin: float, fmax: float, n_freqs: int) -> NDArray[np.float64]:
    """Sample the frequency band [fmin, fmax] at ``n_freqs`` points."""
    check_band(fmin, fmax)
    return linspace(fmin, fmax, n_freqs)


def om(freq: float, eps: float) -> Complex:
    """Angular frequency ω = 2πf − i·2πf·ε."""
    w = 2 * math.pi * float(freq)
    return Complex(w, -w * eps)


def angular_frequencies(freqs: Iterable[float], eps: float) -> list[Complex]:
    """Map real frequencies to complex angular frequencies."""
    return [om(f, eps) for f in freqs]


def circle_radius(tau: Complex) -> float:
    """Radius shared by every per-frequency circle: |τ| / (2·|Im(τ)|)."""
    check_tau(tau)
    return cabs(tau) / abs(2 * tau.imag)


def circle_center(omega: Complex, tau: Complex) -> Complex:
    """Center induced by angular frequency ω: (½ + i·Re(τ)/(2·Im(τ))) − ω/(ω − τ).

    Raises:
        DomainError: If Im(τ) == 0 or ω == τ.
    """
    check_tau(tau)
    diff = subtract(omega, tau)
    if cabs_squared(diff) == 0:
        raise DomainError(f"angular frequency coincides with tau ({tau})")
    eta = divide(omega, diff)
    return subtract(Complex(0.5, tau.real / (2 * tau.imag)), eta)


def compute_main_circle(tau: Complex, eps: float) -> Circle:
    """Compute the main circle on which all frequency centers lie.

    Args:
        tau: Relaxation parameter (Im(τ) != 0).
        eps: Damping ratio ε > 0.

    Returns:
        Circle centered on the imaginary axis.

    Raises:
        DomainError: If Im(τ) == 0 or Im(τ) + ε·Re(τ) == 0.
        RangeError: If ε <= 0.
    """
    check_eps(eps)
    check_tau(tau)
    shift = tau.imag + eps * tau.real
    if shift == 0:
        raise DomainError(f"main circle is undefined: Im(tau) + eps*Re(tau) == 0 for tau={tau}")
    tau_sq = cabs_squared(tau)
    center = Complex(0.0, eps * tau_sq / (2 * tau.imag * shift))
    radius = math.sqrt(tau_sq * (eps**2 + 1) / (4 * shift**2))
    return Circle(center=center, radius=radius)


def frequency_circle(freq: float, tau: Complex, eps: float) -> Circle:
    """Circle induced by a single real frequency."""
    check_eps(eps)
    return Circle(center=circle_center(om(freq, eps), tau), radius=circle_radius(tau))


def compute_frequency_circles(
    tau: Complex,
    eps: float,
    fmin: float,
    fmax: float,
    n_freqs: int,
) -> list[Circle]:
    """Compute one circle per sampled frequency.

    Circles are returned in increasing-frequency order and all share the
    radius |τ| / (2·|Im(τ)|).

    Raises:
        DomainError: Degenerate band, n_freqs < 2, Im(τ) == 0 or ω == τ.
        RangeError: If ε <= 0.
    """
    check_eps(eps)
    freqs = frequency_sample(fmin, fmax, n_freqs)
    radius = circle_radius(tau)
    return [
        Circle(center=circle_center(omega, tau), radius=radius)
        for omega in angular_frequencies(freqs, eps)
    ]


__all__ = [
    "Circle",
    "angular_frequencies",
    "check_band",
    "check_eps",
    "check_tau",
    "circle_center",
    "circle_radius",
    "compute_frequency_circles",
    "compute_main_circle",
    "frequency_circle",
    "frequency_sample",
    "linspace",
    "om",
]
