"""optimal-tau: optimal complex relaxation parameter for a frequency band."""

__version__ = "0.1.0"

from optimal_tau.algorithms import (
    Circle,
    Complex,
    amplification,
    amplification_optimal,
    compute_axis_scale,
    compute_frequency_circles,
    compute_main_circle,
    compute_optimal_tau,
)
from optimal_tau.errors import DomainError, RangeError
from optimal_tau.session import Session

__all__ = [
    "__version__",
    "Circle",
    "Complex",
    "DomainError",
    "RangeError",
    "Session",
    "amplification",
    "amplification_optimal",
    "compute_axis_scale",
    "compute_frequency_circles",
    "compute_main_circle",
    "compute_optimal_tau",
]
