"""Error types raised by the numerical core.

Both derive from ValueError so callers that only care about "bad input"
can catch a single type.
"""


class DomainError(ValueError):
    """Input lies outside the domain where a formula is defined.

    Raised for zero-magnitude divisors, τ with zero imaginary part,
    degenerate frequency bands and too few frequency samples.
    """


class RangeError(ValueError):
    """A parameter that must be strictly positive is not (e.g. ε <= 0)."""


__all__ = ["DomainError", "RangeError"]
