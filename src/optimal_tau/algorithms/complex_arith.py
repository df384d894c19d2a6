"""Arithmetic over a real/complex discriminated union.

A ``Number`` is either a plain Python float (the real case) or a
``Complex`` pair. Every operation dispatches on which operands are complex:

- real ⊗ real short-circuits to scalar float arithmetic
- any complex operand produces a ``Complex``

Once a value has been promoted to ``Complex`` it stays complex, even when
its imaginary part is exactly zero.

Division by a value of zero magnitude raises ``DomainError`` instead of
producing inf/nan.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TypeAlias

from optimal_tau.errors import DomainError


@dataclass(frozen=True, slots=True)
class Complex:
    """Complex number as an immutable (real, imag) pair."""

    real: float
    """Real part."""

    imag: float
    """Imaginary part."""

    def __neg__(self) -> Complex:
        return negate(self)

    def __add__(self, other: Number) -> Complex:
        return add(self, other)

    def __radd__(self, other: Number) -> Complex:
        return add(other, self)

    def __sub__(self, other: Number) -> Complex:
        return subtract(self, other)

    def __rsub__(self, other: Number) -> Complex:
        return subtract(other, self)

    def __mul__(self, other: Number) -> Complex:
        return multiply(self, other)

    def __rmul__(self, other: Number) -> Complex:
        return multiply(other, self)

    def __truediv__(self, other: Number) -> Complex:
        return divide(self, other)

    def __rtruediv__(self, other: Number) -> Complex:
        return divide(other, self)

    def __abs__(self) -> float:
        return cabs(self)

    def conjugate(self) -> Complex:
        return conjugate(self)

    def to_builtin(self) -> complex:
        """Convert to Python's builtin ``complex``."""
        return complex(self.real, self.imag)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"real": self.real, "imag": self.imag}


Number: TypeAlias = float | Complex
"""Either a real scalar or a ``Complex`` pair."""


def is_complex(x: Number) -> bool:
    """Return True if ``x`` is the complex variant of the union."""
    return isinstance(x, Complex)


def as_complex(x: Number) -> Complex:
    """Promote ``x`` to ``Complex`` (no-op for values already complex)."""
    if isinstance(x, Complex):
        return x
    return Complex(float(x), 0.0)


def cabs_squared(x: Number) -> float:
    """Squared magnitude: x² for reals, real² + imag² for complex values."""
    if isinstance(x, Complex):
        return x.real**2 + x.imag**2
    return float(x) ** 2


def cabs(x: Number) -> float:
    """Magnitude |x|."""
    if isinstance(x, Complex):
        return math.sqrt(cabs_squared(x))
    return abs(float(x))


def negate(x: Number) -> Number:
    """Return -x."""
    if isinstance(x, Complex):
        return Complex(-x.real, -x.imag)
    return -x


def conjugate(x: Number) -> Number:
    """Complex conjugate; reals are returned unchanged."""
    if isinstance(x, Complex):
        return Complex(x.real, -x.imag)
    return x


def add(l: Number, r: Number) -> Number:  # noqa: E741
    """Return l + r."""
    if isinstance(l, Complex):
        if isinstance(r, Complex):
            return Complex(l.real + r.real, l.imag + r.imag)
        return Complex(l.real + r, l.imag)
    if isinstance(r, Complex):
        return Complex(l + r.real, r.imag)
    return l + r


def subtract(l: Number, r: Number) -> Number:  # noqa: E741
    """Return l - r."""
    if isinstance(l, Complex):
        if isinstance(r, Complex):
            return Complex(l.real - r.real, l.imag - r.imag)
        return Complex(l.real - r, l.imag)
    if isinstance(r, Complex):
        return Complex(l - r.real, -r.imag)
    return l - r


def multiply(l: Number, r: Number) -> Number:  # noqa: E741
    """Return l * r."""
    if isinstance(l, Complex):
        if isinstance(r, Complex):
            return Complex(
                l.real * r.real - l.imag * r.imag,
                l.real * r.imag + l.imag * r.real,
            )
        return Complex(l.real * r, l.imag * r)
    if isinstance(r, Complex):
        return Complex(l * r.real, l * r.imag)
    return l * r


def divide(l: Number, r: Number) -> Number:  # noqa: E741
    """Return l / r.

    Real divisors divide each component independently. Complex divisors
    are handled by rationalization: ``l * conj(r) / |r|²``.

    Raises:
        DomainError: If ``r`` has zero magnitude.
    """
    if not isinstance(r, Complex):
        if r == 0:
            raise DomainError("division by zero")
        if isinstance(l, Complex):
            return Complex(l.real / r, l.imag / r)
        return l / r

    d = cabs_squared(r)
    if d == 0:
        raise DomainError("division by a complex number of zero magnitude")
    n = as_complex(multiply(l, conjugate(r)))
    return Complex(n.real / d, n.imag / d)


__all__ = [
    "Complex",
    "Number",
    "add",
    "as_complex",
    "cabs",
    "cabs_squared",
    "conjugate",
    "divide",
    "is_complex",
    "multiply",
    "negate",
    "subtract",
]
