"""Tests for the frequency-to-circle mapping."""

import math

import numpy as np
import pytest

from optimal_tau.algorithms.complex_arith import Complex, cabs, subtract
from optimal_tau.algorithms.geometry import (
    Circle,
    circle_center,
    circle_radius,
    compute_frequency_circles,
    compute_main_circle,
    frequency_circle,
    frequency_sample,
    linspace,
    om,
)
from optimal_tau.algorithms.solver import compute_optimal_tau
from optimal_tau.errors import DomainError, RangeError


@pytest.fixture
def tau() -> Complex:
    """Optimal τ for the reference band ε=0.7, f ∈ [1, 9]."""
    return compute_optimal_tau(0.7, 1.0, 9.0)


class TestOm:
    """Tests for the angular frequency map."""

    def test_value(self) -> None:
        assert om(1.0, 0.7) == Complex(2 * math.pi, -2 * math.pi * 0.7)

    def test_negative_imaginary_part(self) -> None:
        assert om(3.0, 0.2).imag < 0


class TestLinspace:
    """Tests for linspace / frequency_sample."""

    def test_includes_both_ends(self) -> None:
        np.testing.assert_allclose(linspace(1.0, 9.0, 5), [1.0, 3.0, 5.0, 7.0, 9.0])

    @pytest.mark.parametrize("n", [1, 0, -3])
    def test_too_few_samples_raises(self, n: int) -> None:
        """A single point has no spacing: DomainError, not a division by zero."""
        with pytest.raises(DomainError, match="at least 2"):
            linspace(1.0, 9.0, n)

    def test_degenerate_band_raises(self) -> None:
        with pytest.raises(DomainError, match="fmin must be smaller"):
            frequency_sample(4.0, 4.0, 7)


class TestMainCircle:
    """Tests for compute_main_circle."""

    def test_center_on_imaginary_axis(self, tau: Complex) -> None:
        circle = compute_main_circle(tau, 0.7)
        assert circle.center.real == 0.0

    def test_formula(self, tau: Complex) -> None:
        eps = 0.7
        shift = tau.imag + eps * tau.real
        circle = compute_main_circle(tau, eps)
        assert np.isclose(
            circle.center.imag, eps * abs(tau) ** 2 / (2 * tau.imag * shift)
        )
        assert np.isclose(
            circle.radius, math.sqrt(abs(tau) ** 2 * (eps**2 + 1) / (4 * shift**2))
        )

    @pytest.mark.parametrize(
        "tau_value,eps",
        [
            (Complex(5.0, -3.0), 0.7),
            (Complex(-2.0, 1.0), 0.1),
            (Complex(0.0, -1.0), 1.0),
            (Complex(100.0, -0.5), 2.0),
        ],
    )
    def test_radius_nonnegative(self, tau_value: Complex, eps: float) -> None:
        assert compute_main_circle(tau_value, eps).radius >= 0

    def test_known_case(self) -> None:
        """τ = −i, ε = 1: center 0.5i, radius sqrt(1/2)."""
        circle = compute_main_circle(Complex(0.0, -1.0), 1.0)
        assert circle.center == Complex(0.0, 0.5)
        assert np.isclose(circle.radius, math.sqrt(0.5))

    def test_real_tau_raises(self) -> None:
        with pytest.raises(DomainError):
            compute_main_circle(Complex(3.0, 0.0), 0.7)

    def test_degenerate_shift_raises(self) -> None:
        """Im(τ) + ε·Re(τ) == 0 has no main circle."""
        with pytest.raises(DomainError, match="undefined"):
            compute_main_circle(Complex(2.0, -1.0), 0.5)

    def test_nonpositive_eps_raises(self, tau: Complex) -> None:
        with pytest.raises(RangeError):
            compute_main_circle(tau, 0.0)


class TestFrequencyCircles:
    """Tests for compute_frequency_circles."""

    def test_count_and_type(self, tau: Complex) -> None:
        circles = compute_frequency_circles(tau, 0.7, 1.0, 9.0, 7)
        assert len(circles) == 7
        assert all(isinstance(c, Circle) for c in circles)

    def test_shared_radius(self, tau: Complex) -> None:
        """Every circle has radius |τ| / (2·|Im(τ)|)."""
        circles = compute_frequency_circles(tau, 0.7, 1.0, 9.0, 25)
        expected = abs(tau) / (2 * abs(tau.imag))
        assert {c.radius for c in circles} == {expected}

    def test_increasing_frequency_order(self, tau: Complex) -> None:
        circles = compute_frequency_circles(tau, 0.7, 1.0, 9.0, 5)
        for f, circle in zip([1.0, 3.0, 5.0, 7.0, 9.0], circles, strict=True):
            expected = frequency_circle(f, tau, 0.7)
            assert np.isclose(circle.center.real, expected.center.real)
            assert np.isclose(circle.center.imag, expected.center.imag)

    @pytest.mark.parametrize(
        "tau_value,eps",
        [(None, 0.7), (Complex(5.0, -3.0), 0.7), (Complex(-2.0, 1.0), 0.3)],
    )
    def test_centers_lie_on_main_circle(self, tau: Complex, tau_value, eps: float) -> None:
        """Every frequency center is at distance R from the main circle center."""
        t = tau if tau_value is None else tau_value
        main = compute_main_circle(t, eps)
        for circle in compute_frequency_circles(t, eps, 1.0, 9.0, 11):
            distance = cabs(subtract(circle.center, main.center))
            assert np.isclose(distance, main.radius, rtol=1e-9)

    def test_centers_vary_continuously(self, tau: Complex) -> None:
        """Nearby frequencies have nearby centers."""
        a = circle_center(om(4.0, 0.7), tau)
        b = circle_center(om(4.0 + 1e-6, 0.7), tau)
        assert cabs(subtract(a, b)) < 1e-4

    def test_single_frequency_raises(self, tau: Complex) -> None:
        with pytest.raises(DomainError):
            compute_frequency_circles(tau, 0.7, 1.0, 9.0, 1)

    def test_degenerate_band_raises(self, tau: Complex) -> None:
        """fmin == fmax fails before any geometry is computed."""
        with pytest.raises(DomainError, match="fmin must be smaller"):
            compute_frequency_circles(tau, 0.7, 2.0, 2.0, 7)

    def test_real_tau_raises(self) -> None:
        with pytest.raises(DomainError, match="imaginary"):
            compute_frequency_circles(Complex(4.0, 0.0), 0.7, 1.0, 9.0, 7)

    def test_nonpositive_eps_raises(self, tau: Complex) -> None:
        with pytest.raises(RangeError):
            compute_frequency_circles(tau, -1.0, 1.0, 9.0, 7)

    def test_radius_helper(self) -> None:
        assert circle_radius(Complex(3.0, -4.0)) == 5.0 / 8.0
