"""Tests for complex_arith module."""

import math

import pytest

from optimal_tau.algorithms.complex_arith import (
    Complex,
    add,
    as_complex,
    cabs,
    cabs_squared,
    conjugate,
    divide,
    is_complex,
    multiply,
    negate,
    subtract,
)
from optimal_tau.errors import DomainError


def _close(a, b, tol: float = 1e-12) -> bool:
    return cabs(subtract(a, b)) <= tol * max(1.0, cabs(b))


class TestRealFastPath:
    """Real ⊗ real operations stay plain floats."""

    @pytest.mark.parametrize(
        "op,expected",
        [(add, 5.0), (subtract, -1.0), (multiply, 6.0), (divide, 2.0 / 3.0)],
    )
    def test_binary_ops_return_float(self, op, expected: float) -> None:
        """Results of real operands are not wrapped in Complex."""
        result = op(2.0, 3.0)
        assert not is_complex(result)
        assert result == pytest.approx(expected)

    def test_unary_ops_on_reals(self) -> None:
        """negate/conjugate/abs operate on plain numbers."""
        assert negate(2.5) == -2.5
        assert conjugate(2.5) == 2.5
        assert cabs(-2.5) == 2.5
        assert cabs_squared(-3.0) == 9.0


class TestMixedOperands:
    """Real ⊗ complex and complex ⊗ real promote to Complex."""

    def test_add(self) -> None:
        assert add(1.0, Complex(2.0, 3.0)) == Complex(3.0, 3.0)
        assert add(Complex(2.0, 3.0), 1.0) == Complex(3.0, 3.0)

    def test_subtract(self) -> None:
        assert subtract(1.0, Complex(2.0, 3.0)) == Complex(-1.0, -3.0)
        assert subtract(Complex(2.0, 3.0), 1.0) == Complex(1.0, 3.0)

    def test_multiply(self) -> None:
        assert multiply(2.0, Complex(1.0, -1.0)) == Complex(2.0, -2.0)
        assert multiply(Complex(1.0, -1.0), 2.0) == Complex(2.0, -2.0)

    def test_divide_by_real(self) -> None:
        """Real divisors divide each component independently."""
        assert divide(Complex(2.0, -4.0), 2.0) == Complex(1.0, -2.0)

    def test_divide_real_by_complex(self) -> None:
        """1 / i = -i."""
        assert divide(1.0, Complex(0.0, 1.0)) == Complex(0.0, -1.0)


class TestComplexOperands:
    """Complex ⊗ complex operations."""

    def test_multiply(self) -> None:
        """(1+2i)(3+4i) = -5+10i."""
        assert multiply(Complex(1.0, 2.0), Complex(3.0, 4.0)) == Complex(-5.0, 10.0)

    def test_divide(self) -> None:
        """(-5+10i)/(3+4i) = 1+2i."""
        result = divide(Complex(-5.0, 10.0), Complex(3.0, 4.0))
        assert result.real == pytest.approx(1.0)
        assert result.imag == pytest.approx(2.0)

    def test_abs(self) -> None:
        assert cabs(Complex(3.0, 4.0)) == 5.0
        assert cabs_squared(Complex(3.0, 4.0)) == 25.0

    def test_no_implicit_collapse(self) -> None:
        """A complex result with zero imaginary part stays complex."""
        result = add(Complex(1.0, 1.0), Complex(0.0, -1.0))
        assert is_complex(result)
        assert result.imag == 0.0

    def test_as_complex(self) -> None:
        """Reals are promoted, complex values pass through."""
        z = Complex(1.0, 2.0)
        assert as_complex(z) is z
        assert as_complex(3) == Complex(3.0, 0.0)


class TestDivisionByZero:
    """Zero-magnitude divisors raise DomainError."""

    @pytest.mark.parametrize(
        "numerator,denominator",
        [
            (1.0, 0.0),
            (Complex(1.0, 1.0), 0.0),
            (1.0, Complex(0.0, 0.0)),
            (Complex(1.0, 1.0), Complex(0.0, 0.0)),
        ],
    )
    def test_raises_domain_error(self, numerator, denominator) -> None:
        with pytest.raises(DomainError, match="zero"):
            divide(numerator, denominator)


class TestOperators:
    """Complex dunder methods delegate to the module functions."""

    def test_arithmetic_operators(self) -> None:
        z = Complex(1.0, 2.0)
        assert z + 1 == Complex(2.0, 2.0)
        assert 1 - z == Complex(0.0, -2.0)
        assert 2 * z == Complex(2.0, 4.0)
        assert -z == Complex(-1.0, -2.0)
        assert z.conjugate() == Complex(1.0, -2.0)
        assert abs(Complex(3.0, 4.0)) == 5.0

    def test_to_builtin(self) -> None:
        assert Complex(1.0, -2.0).to_builtin() == complex(1.0, -2.0)


class TestProperties:
    """Algebraic identities over representative values."""

    @pytest.mark.parametrize("x", [0.0, 1.5, -2.25, 1e9, -1e-9])
    def test_abs_negate_real(self, x: float) -> None:
        """|−x| == |x| for reals."""
        assert cabs(negate(x)) == cabs(x)

    @pytest.mark.parametrize(
        "z", [Complex(3.0, 4.0), Complex(-1.5, 0.25), Complex(0.0, -7.0), Complex(1e6, 1e-6)]
    )
    def test_abs_conjugate_complex(self, z: Complex) -> None:
        """|conj(z)| == |z|."""
        assert cabs(conjugate(z)) == cabs(z)

    @pytest.mark.parametrize(
        "a,b",
        [
            (3.0, 7.0),
            (3.0, Complex(1.0, -2.0)),
            (Complex(1.0, -2.0), 3.0),
            (Complex(2.0, 5.0), Complex(-0.5, 0.25)),
            (Complex(2 * math.pi, -2 * math.pi * 0.7), Complex(5.2, -2.8)),
        ],
    )
    def test_divide_then_multiply_roundtrip(self, a, b) -> None:
        """(a / b) * b ≈ a."""
        assert _close(multiply(divide(a, b), b), a)
