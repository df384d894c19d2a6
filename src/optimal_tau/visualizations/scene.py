"""Scene builder: settings + viewport → drawing list.

A ``Scene`` is plain data in device pixels with a y-down screen
coordinate system. It contains the gridlines, the main circle, one circle
per sampled frequency, the plot frame and the axis labels. Backends
(``optimal_tau.visualizations.svg``) only translate it to their format;
no numerical work happens outside this module and ``algorithms``.

Layout:
    - The plot area is the viewport minus the style margins.
    - The world-to-pixel scale fits a disc of radius (R + r)·padding,
      centered on the main circle center, into the plot area.
    - Gridlines come from the adaptive axis scaler; pixel positions are
      rounded and offset by half a pixel so 1px lines stay crisp.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from optimal_tau.algorithms.axis_scale import (
    AxisScale,
    compute_axis_scale,
    format_label,
    is_major,
    label_range,
    round_half_up,
    tick_range,
)
from optimal_tau.algorithms.complex_arith import Complex
from optimal_tau.algorithms.geometry import (
    Circle,
    compute_frequency_circles,
    compute_main_circle,
)
from optimal_tau.data.settings import Settings
from optimal_tau.data.style import DEFAULT_STYLE, RenderStyle
from optimal_tau.errors import DomainError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Viewport:
    """Drawing surface size in CSS pixels and its device-pixel ratio."""

    width: float
    height: float
    dpr: float = 1.0

    @property
    def device_width(self) -> int:
        return round_half_up(self.dpr * self.width)

    @property
    def device_height(self) -> int:
        return round_half_up(self.dpr * self.height)


@dataclass(frozen=True, slots=True)
class Line:
    """Straight line segment."""

    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    width: float


@dataclass(frozen=True, slots=True)
class CircleShape:
    """Stroked circle with a filled dot at its center."""

    cx: float
    cy: float
    r: float
    color: str
    line_width: float
    dot_radius: float


@dataclass(frozen=True, slots=True)
class Label:
    """Text anchored at (x, y)."""

    text: str
    x: float
    y: float
    anchor: str
    """Horizontal alignment: 'start', 'middle' or 'end'."""

    baseline: str
    """Vertical alignment: 'hanging' or 'middle'."""


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned rectangle given by its edges."""

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass(frozen=True, slots=True)
class Scene:
    """Everything needed to draw one frame."""

    width: int
    height: int
    plot_area: Rect
    """Region inside the margins; gridlines and circles are clipped to it."""

    gridlines: tuple[Line, ...]
    """Minor lines first, then major lines."""

    circles: tuple[CircleShape, ...]
    """Main circle first, then frequency circles in increasing frequency."""

    frame: tuple[Line, ...]
    labels: tuple[Label, ...]
    line_width: float
    font_size: float
    font_family: str

    settings: Settings
    """Resolved settings snapshot the scene was built from."""

    main_circle: Circle
    frequency_circles: tuple[Circle, ...]
    axis: AxisScale
    scale: float
    """Device pixels per world unit."""


def build_scene(
    settings: Settings,
    viewport: Viewport,
    style: RenderStyle = DEFAULT_STYLE,
) -> Scene:
    """Compute the drawing list for one redraw pass.

    Args:
        settings: Settings snapshot (τ is resolved if in optimal mode).
        viewport: Target surface.
        style: Colors and spacings.

    Returns:
        Scene in device pixels.

    Raises:
        DomainError: Invalid settings, or a viewport too small for the margins.
        RangeError: If ε <= 0.
    """
    settings.validate()
    settings = settings.resolved()
    tau = settings.tau
    assert tau is not None

    dpr = viewport.dpr
    width, height = viewport.device_width, viewport.device_height
    m = style.margins
    ml = round_half_up(m.left * dpr)
    mr = round_half_up(m.right * dpr)
    mt = round_half_up(m.top * dpr)
    mb = round_half_up(m.bottom * dpr)
    plot_w = width - ml - mr
    plot_h = height - mt - mb
    if plot_w <= 0 or plot_h <= 0:
        raise DomainError(f"viewport {width}x{height} is too small for the margins")

    main = compute_main_circle(tau, settings.eps)
    freq_circles = compute_frequency_circles(
        tau, settings.eps, settings.fmin, settings.fmax, settings.n_freqs
    )
    r = freq_circles[0].radius

    drawing_radius = (main.radius + r) * style.padding
    scale = min(plot_w, plot_h) / (2 * drawing_radius)
    # World coordinates of the lower left corner of the surface.
    off_x = -plot_w / (2 * scale) - ml / scale + main.center.real
    off_y = -plot_h / (2 * scale) - mb / scale + main.center.imag

    def to_px(x: float) -> float:
        return round_half_up((x - off_x) * scale)

    def to_py(y: float) -> float:
        return height - round_half_up((y - off_y) * scale)

    axis = compute_axis_scale(
        style.grid_goal * dpr,
        scale,
        min_label_pixels=style.min_label_spacing * dpr,
    )
    grid_width = max(1, round_half_up(dpr / 2))

    x_ticks = tick_range(axis, off_x, width / scale)
    y_ticks = tick_range(axis, off_y, height / scale)
    minor: list[Line] = []
    major: list[Line] = []
    for i in x_ticks:
        x = to_px(i * axis.unit) + 0.5
        (major if is_major(i) else minor).append(
            Line(x, 0, x, height, _grid_color(style, i), grid_width)
        )
    for i in y_ticks:
        y = to_py(i * axis.unit) - 0.5
        (major if is_major(i) else minor).append(
            Line(0, y, width, y, _grid_color(style, i), grid_width)
        )

    line_width = round_half_up(style.circle_line_width * dpr)
    dot = style.center_dot_radius * dpr

    def shape(circle: Circle, color: str) -> CircleShape:
        c: Complex = circle.center
        return CircleShape(
            cx=(c.real - off_x) * scale + 0.5,
            cy=height - (c.imag - off_y) * scale - 0.5,
            r=circle.radius * scale,
            color=color,
            line_width=line_width,
            dot_radius=dot,
        )

    circles = [shape(main, style.main_circle_color)]
    circles.extend(
        shape(c, style.frequency_color(k, settings.n_freqs))
        for k, c in enumerate(freq_circles)
    )

    plot_area = Rect(ml, mt, width - mr, height - mb)
    frame = (
        Line(ml + 0.5, mt, ml + 0.5, height - mb, style.frame_color, grid_width),
        Line(ml, mt + 0.5, width - mr, mt + 0.5, style.frame_color, grid_width),
        Line(width - mr - 0.5, mt, width - mr - 0.5, height - mb, style.frame_color, grid_width),
        Line(ml, height - mb - 0.5, width - mr, height - mb - 0.5, style.frame_color, grid_width),
    )

    label_gap = style.label_offset
    labels: list[Label] = []
    for i in label_range(axis, x_ticks):
        x = to_px(i * axis.unit)
        if ml <= x <= width - mr:
            text = format_label(i * axis.unit, axis.label_decimals)
            labels.append(Label(text, x, height - mb + label_gap, "middle", "hanging"))
    for i in label_range(axis, y_ticks):
        y = to_py(i * axis.unit)
        if mt <= y <= height - mb:
            text = format_label(i * axis.unit, axis.label_decimals)
            labels.append(Label(text, ml - label_gap, y, "end", "middle"))

    logger.debug(
        "scene %dx%d: scale=%.4g px/unit, step=%g, %d gridlines, %d labels",
        width,
        height,
        scale,
        axis.step,
        len(minor) + len(major),
        len(labels),
    )

    return Scene(
        width=width,
        height=height,
        plot_area=plot_area,
        gridlines=tuple(minor + major),
        circles=tuple(circles),
        frame=frame,
        labels=tuple(labels),
        line_width=grid_width,
        font_size=round_half_up(style.label_font_size * dpr),
        font_family=style.font_family,
        settings=settings,
        main_circle=main,
        frequency_circles=tuple(freq_circles),
        axis=axis,
        scale=scale,
    )


def _grid_color(style: RenderStyle, i: int) -> str:
    return style.major_color if is_major(i) else style.minor_color


__all__ = [
    "CircleShape",
    "Label",
    "Line",
    "Rect",
    "Scene",
    "Viewport",
    "build_scene",
]
