"""Closed-form optimal τ and the amplification functional J.

For a damping ratio ε and an angular frequency band [w, W] the optimal
relaxation parameter has the closed form

    |τ|    = sqrt(w·W·(1 + ε²))
    arg(τ) = atan2(−sqrt(ε²(W + w)² + (W − w)²), 2·sqrt(w·W))

which always lies in the lower half-plane. The amplification functional
J measures, for a finite set of angular frequencies, the worst ratio of
the fixed circle radius to the distance of a frequency's center from the
origin. J_opt is the same worst case evaluated analytically for the
optimal τ.

References:
- Baumann, M. and Van Gijzen, M.B. (2017), TU Delft technical report
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from optimal_tau.algorithms.complex_arith import Complex, cabs
from optimal_tau.algorithms.geometry import (
    angular_frequencies,
    check_band,
    check_eps,
    check_tau,
    circle_center,
    circle_radius,
    linspace,
)
from optimal_tau.errors import DomainError

logger = logging.getLogger(__name__)


DENSE_SAMPLE_SIZE: int = 1000
"""Number of frequencies used when J is evaluated over a "dense" band."""


def opt_tau_anal(eps: float, w: float, W: float) -> Complex:
    """Optimal τ for angular band edges [w, W].

    Args:
        eps: Damping ratio ε > 0.
        w: Lower angular band edge (> 0).
        W: Upper angular band edge (> w).

    Returns:
        τ with negative imaginary part.

    Raises:
        RangeError: If ε <= 0.
        DomainError: If the band is empty or not strictly positive, or the
            resulting τ has no imaginary part.

    Example:
        >>> tau = opt_tau_anal(0.7, 2 * math.pi, 18 * math.pi)
        >>> tau.imag < 0
        True
    """
    check_eps(eps)
    if not w > 0:
        raise DomainError(f"lower band edge must be positive, got {w}")
    check_band(w, W)

    r = math.sqrt(w * W * (1 + eps**2))
    th = math.atan2(
        -math.sqrt((eps * (W + w)) ** 2 + (W - w) ** 2),
        2 * math.sqrt(w * W),
    )
    tau = Complex(r * math.cos(th), r * math.sin(th))
    check_tau(tau)
    logger.debug("optimal tau for eps=%g, band=[%g, %g]: %s", eps, w, W, tau)
    return tau


def J_opt(eps: float, w: float, W: float) -> float:  # noqa: N802
    """Worst-case amplification of the optimal τ, in closed form.

    Uses that every frequency center lies on the main circle (C, R), so
    |c(w)|² = R² − C² + 2·C·Im(c(w)) at the lower band edge.

    Raises:
        RangeError: If ε <= 0.
        DomainError: If the band is degenerate or the closed form breaks down.
    """
    tau = opt_tau_anal(eps, w, W)
    tr, ti = tau.real, tau.imag
    shift = tr * eps + ti
    if shift == 0:
        raise DomainError(f"main circle is undefined for tau={tau}")

    r = 0.5 * math.sqrt(1 + (tr / ti) ** 2)
    c1_im = tr / (2 * ti) - shift * w / ((w - tr) ** 2 + (eps * w + ti) ** 2)
    R = math.sqrt(tr**2 + ti**2) * math.sqrt(eps**2 + 1) / (2 * abs(shift))
    C_im = eps * (tr**2 + ti**2) / (2 * ti * shift)

    denominator = R**2 - C_im**2 + 2 * C_im * c1_im
    if not denominator > 0:
        raise DomainError(
            f"closed-form J_opt is undefined for eps={eps}, band=[{w}, {W}]"
        )
    return math.sqrt(r**2 / denominator)


def J(om: Sequence[Complex], tau: Complex) -> float:  # noqa: N802
    """Amplification functional: max over k of r / |c_k|.

    Args:
        om: Complex angular frequencies ω_k.
        tau: Relaxation parameter.

    Returns:
        Worst-case ratio of the fixed radius to a center's distance from 0.

    Raises:
        DomainError: If ``om`` is empty, Im(τ) == 0, ω_k == τ, or some
            center c_k sits at the origin.
    """
    if len(om) == 0:
        raise DomainError("cannot evaluate J over an empty frequency sample")
    r = circle_radius(tau)

    values = []
    for k, omega in enumerate(om):
        ck = cabs(circle_center(omega, tau))
        if ck == 0:
            raise DomainError(f"center of frequency {k} ({omega}) is at the origin")
        values.append(r / ck)
    return max(values)


def compute_optimal_tau(eps: float, fmin: float, fmax: float) -> Complex:
    """Optimal τ for the frequency band [fmin, fmax] (ordinary frequencies)."""
    check_band(fmin, fmax)
    return opt_tau_anal(eps, 2 * math.pi * fmin, 2 * math.pi * fmax)


def amplification(tau: Complex, frequency_sample: Iterable[Complex]) -> float:
    """J for a sample of complex angular frequencies (see ``angular_sample``)."""
    return J(list(frequency_sample), tau)


def amplification_optimal(eps: float, fmin: float, fmax: float) -> float:
    """J_opt for the frequency band [fmin, fmax] (ordinary frequencies)."""
    check_band(fmin, fmax)
    return J_opt(eps, 2 * math.pi * fmin, 2 * math.pi * fmax)


def angular_sample(
    fmin: float,
    fmax: float,
    eps: float,
    n: int = DENSE_SAMPLE_SIZE,
) -> list[Complex]:
    """Angular frequencies of ``n`` evenly spaced frequencies in [fmin, fmax]."""
    check_eps(eps)
    check_band(fmin, fmax)
    return angular_frequencies(linspace(fmin, fmax, n), eps)


__all__ = [
    "DENSE_SAMPLE_SIZE",
    "J",
    "J_opt",
    "amplification",
    "amplification_optimal",
    "angular_sample",
    "compute_optimal_tau",
    "opt_tau_anal",
]
