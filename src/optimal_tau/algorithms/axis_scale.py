"""Adaptive "nice number" axis scaling.

Gridlines are placed at multiples of ``step_multiplier · 10^k`` world
units, with ``step_multiplier`` one of 2, 5 or 10, chosen so that the
on-screen spacing is as close as possible to a goal spacing. Gridlines at
indices that are multiples of ten are major lines. Labels are drawn every
10, 20 or 50 base units, escalating until labels are at least
``min_label_pixels`` apart.

All positions are expressed as integer indices ``i`` with world value
``i · 10^k``, so gridlines always land on round values regardless of zoom.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from optimal_tau.errors import DomainError

STEP_MULTIPLIERS: tuple[int, ...] = (2, 5, 10)
"""Candidate gridline multipliers, in tie-breaking order."""

LABEL_MULTIPLES: tuple[int, ...] = (10, 20, 50)
"""Candidate label multiples of the base unit, in escalation order."""


@dataclass(frozen=True, slots=True)
class AxisScale:
    """Gridline and label spacing for one zoom level."""

    step_multiplier: int
    """Gridline multiplier (2, 5 or 10)."""

    decimal_power: int
    """Power k of the base unit 10^k."""

    pixels_per_unit: float
    """World-to-pixel scale."""

    label_multiple: int
    """Label spacing in base units (10, 20 or 50)."""

    @property
    def unit(self) -> float:
        """Base unit 10^k."""
        return 10.0**self.decimal_power

    @property
    def step(self) -> float:
        """Gridline spacing in world units."""
        return self.step_multiplier * self.unit

    @property
    def step_pixels(self) -> float:
        """Gridline spacing in pixels."""
        return self.step * self.pixels_per_unit

    @property
    def label_step(self) -> float:
        """Label spacing in world units."""
        return self.label_multiple * self.unit

    @property
    def label_decimals(self) -> int:
        """Decimals needed to print label values exactly."""
        return -1 - self.decimal_power

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "step": self.step,
            "step_multiplier": self.step_multiplier,
            "decimal_power": self.decimal_power,
            "pixels_per_unit": self.pixels_per_unit,
            "label_multiple": self.label_multiple,
        }


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves towards +inf."""
    return math.floor(x + 0.5)


def round_pow10(x: float) -> float:
    """Nearest power of ten to ``x`` on a log scale."""
    return 10.0 ** round_half_up(math.log10(x))


def choose_step_multiplier(goal: float, scale: float) -> int:
    """Pick the multiplier whose rounded spacing lands closest to ``goal``.

    Ties go to the earliest candidate in ``STEP_MULTIPLIERS``.
    """
    best = STEP_MULTIPLIERS[0]
    best_dev = math.inf
    for k in STEP_MULTIPLIERS:
        dev = abs(k * round_pow10(goal / (k * scale)) * scale - goal)
        if dev < best_dev:
            best, best_dev = k, dev
    return best


def choose_label_multiple(unit_pixels: float, min_label_pixels: float) -> int:
    """Escalate 10 → 20 → 50 while labels would be closer than ``min_label_pixels``."""
    multiple = LABEL_MULTIPLES[0]
    for candidate in LABEL_MULTIPLES[1:]:
        if multiple * unit_pixels >= min_label_pixels:
            break
        multiple = candidate
    return multiple


def compute_axis_scale(
    goal_pixels: float,
    world_to_pixel_scale: float,
    *,
    min_label_pixels: float | None = None,
) -> AxisScale:
    """Choose gridline and label spacing for a zoom level.

    Args:
        goal_pixels: Desired gridline spacing in pixels.
        world_to_pixel_scale: Pixels per world unit.
        min_label_pixels: Minimum label spacing (default ``2 * goal_pixels``).

    Returns:
        AxisScale with step ``step_multiplier · 10^k``.

    Raises:
        DomainError: If goal or scale is not strictly positive.

    Example:
        >>> compute_axis_scale(25, 1.0).step
        20.0
    """
    if not goal_pixels > 0:
        raise DomainError(f"goal spacing must be positive, got {goal_pixels}")
    if not world_to_pixel_scale > 0 or math.isinf(world_to_pixel_scale):
        raise DomainError(f"scale must be positive and finite, got {world_to_pixel_scale}")
    if min_label_pixels is None:
        min_label_pixels = 2 * goal_pixels

    step_multiplier = choose_step_multiplier(goal_pixels, world_to_pixel_scale)
    power = round_half_up(
        math.log10(goal_pixels / (step_multiplier * world_to_pixel_scale))
    )
    unit_pixels = 10.0**power * world_to_pixel_scale

    return AxisScale(
        step_multiplier=step_multiplier,
        decimal_power=power,
        pixels_per_unit=world_to_pixel_scale,
        label_multiple=choose_label_multiple(unit_pixels, min_label_pixels),
    )


def tick_range(axis: AxisScale, start: float, span: float) -> range:
    """Gridline indices covering [start, start + span] in world units.

    The first and last index are rounded outwards to multiples of the
    step multiplier; index ``i`` sits at world value ``i · axis.unit``.
    """
    i_min = math.floor(start / axis.step) * axis.step_multiplier
    i_max = math.ceil((start + span) / axis.step) * axis.step_multiplier
    return range(i_min, i_max + 1, axis.step_multiplier)


def label_range(axis: AxisScale, ticks: range) -> range:
    """Subset of gridline indices that carry a label."""
    m = axis.label_multiple
    first = math.ceil(ticks.start / m) * m
    last = math.floor(ticks[-1] / m) * m
    return range(first, last + 1, m)


def is_major(i: int) -> bool:
    """Gridlines at multiples of ten base units are drawn as major lines."""
    return i % 10 == 0


def format_label(value: float, ndecimals: int) -> str:
    """Format ``value`` with exactly ``ndecimals`` decimals.

    Rounds half up on the scaled integer, so ``-0.04`` at one decimal
    prints as ``"0.0"`` rather than ``"-0.0"``.
    """
    if ndecimals <= 0:
        return str(round_half_up(value))
    q = round_half_up(value * 10**ndecimals)
    digits = str(abs(q)).rjust(ndecimals + 1, "0")
    sign = "-" if q < 0 else ""
    return f"{sign}{digits[:-ndecimals]}.{digits[-ndecimals:]}"


__all__ = [
    "AxisScale",
    "LABEL_MULTIPLES",
    "STEP_MULTIPLIERS",
    "choose_label_multiple",
    "choose_step_multiplier",
    "compute_axis_scale",
    "format_label",
    "is_major",
    "label_range",
    "round_half_up",
    "round_pow10",
    "tick_range",
]
