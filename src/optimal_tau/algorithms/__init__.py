"""Numerical core.

This module contains implementations of:
- Real/complex discriminated-union arithmetic
- Closed-form optimal τ solver and the amplification functional J
- Frequency-to-circle (Möbius-style) mapping
- Adaptive "nice number" axis scaling
"""

from optimal_tau.algorithms.axis_scale import (
    AxisScale,
    compute_axis_scale,
    format_label,
    is_major,
    label_range,
    tick_range,
)
from optimal_tau.algorithms.complex_arith import (
    Complex,
    Number,
    add,
    as_complex,
    cabs,
    cabs_squared,
    conjugate,
    divide,
    multiply,
    negate,
    subtract,
)
from optimal_tau.algorithms.geometry import (
    Circle,
    angular_frequencies,
    compute_frequency_circles,
    compute_main_circle,
    frequency_circle,
    frequency_sample,
    om,
)
from optimal_tau.algorithms.solver import (
    J,
    J_opt,
    amplification,
    amplification_optimal,
    angular_sample,
    compute_optimal_tau,
    opt_tau_anal,
)

__all__ = [
    # Complex arithmetic
    "Complex",
    "Number",
    "add",
    "as_complex",
    "cabs",
    "cabs_squared",
    "conjugate",
    "divide",
    "multiply",
    "negate",
    "subtract",
    # Solver
    "J",
    "J_opt",
    "amplification",
    "amplification_optimal",
    "angular_sample",
    "compute_optimal_tau",
    "opt_tau_anal",
    # Geometry
    "Circle",
    "angular_frequencies",
    "compute_frequency_circles",
    "compute_main_circle",
    "frequency_circle",
    "frequency_sample",
    "om",
    # Axis scaling
    "AxisScale",
    "compute_axis_scale",
    "format_label",
    "is_major",
    "label_range",
    "tick_range",
]
