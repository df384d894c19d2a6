"""Render style configuration.

All lengths are CSS pixels; the scene builder multiplies them by the
device-pixel ratio of the viewport, except ``label_offset``.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Margins:
    """Space reserved around the plot area for axis labels."""

    left: float = 50.0
    right: float = 50.0
    top: float = 75.0
    bottom: float = 50.0


@dataclass(frozen=True, slots=True)
class RenderStyle:
    """Colors, spacings and sizes used by the scene builder."""

    margins: Margins = field(default_factory=Margins)

    grid_goal: float = 25.0
    """Preferred gridline spacing."""

    min_label_spacing: float = 50.0
    """Labels closer than this are thinned out (10 → 20 → 50 units)."""

    padding: float = 1.05
    """Plot radius relative to R + r of the construction."""

    minor_color: str = "#eee"
    major_color: str = "#bbb"
    main_circle_color: str = "#888"
    frame_color: str = "black"

    circle_line_width: float = 2.0
    center_dot_radius: float = 3.0
    label_font_size: float = 12.0
    label_offset: float = 10.0
    """Gap between the plot frame and the axis labels, in device pixels."""

    font_family: str = "'Fira Mono', monospace"

    def frequency_color(self, index: int, count: int) -> str:
        """Evenly spaced hue for the ``index``-th of ``count`` frequencies."""
        return f"hsl({index * 360 / count:g},50%,50%)"


DEFAULT_STYLE = RenderStyle()


__all__ = ["DEFAULT_STYLE", "Margins", "RenderStyle"]
