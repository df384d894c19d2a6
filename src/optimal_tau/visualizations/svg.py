"""SVG backend for ``Scene``."""

from __future__ import annotations

from pathlib import Path
from xml.sax.saxutils import escape, quoteattr

from optimal_tau.visualizations.scene import CircleShape, Label, Line, Scene


def _num(x: float) -> str:
    return f"{x:.6g}"


def _line(line: Line) -> str:
    return (
        f'<line x1="{_num(line.x1)}" y1="{_num(line.y1)}" '
        f'x2="{_num(line.x2)}" y2="{_num(line.y2)}" '
        f'stroke="{line.color}" stroke-width="{_num(line.width)}"/>'
    )


def _circle(c: CircleShape) -> list[str]:
    return [
        f'<circle cx="{_num(c.cx)}" cy="{_num(c.cy)}" r="{_num(c.r)}" '
        f'fill="none" stroke="{c.color}" stroke-width="{_num(c.line_width)}"/>',
        f'<circle cx="{_num(c.cx)}" cy="{_num(c.cy)}" r="{_num(c.dot_radius)}" '
        f'fill="{c.color}"/>',
    ]


def _label(label: Label) -> str:
    return (
        f'<text x="{_num(label.x)}" y="{_num(label.y)}" '
        f'text-anchor="{label.anchor}" dominant-baseline="{label.baseline}">'
        f"{escape(label.text)}</text>"
    )


def scene_to_svg(scene: Scene) -> str:
    """Serialize a scene as a standalone SVG document.

    Gridlines and circles are clipped to the plot area; the frame and the
    labels are drawn on top, outside the clip.
    """
    area = scene.plot_area
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{scene.width}" '
        f'height="{scene.height}" viewBox="0 0 {scene.width} {scene.height}">',
        "<defs>",
        f'<clipPath id="plot"><rect x="{_num(area.left)}" y="{_num(area.top)}" '
        f'width="{_num(area.width)}" height="{_num(area.height)}"/></clipPath>',
        "</defs>",
        '<rect width="100%" height="100%" fill="white"/>',
        '<g clip-path="url(#plot)">',
    ]
    parts.extend(_line(line) for line in scene.gridlines)
    for circle in scene.circles:
        parts.extend(_circle(circle))
    parts.append("</g>")

    parts.append("<g>")
    parts.extend(_line(line) for line in scene.frame)
    parts.append("</g>")

    parts.append(
        f"<g font-family={quoteattr(scene.font_family)} "
        f'font-size="{_num(scene.font_size)}" fill="black">'
    )
    parts.extend(_label(label) for label in scene.labels)
    parts.append("</g>")

    parts.append("</svg>")
    return "\n".join(parts) + "\n"


def write_svg(scene: Scene, path: Path) -> Path:
    """Write ``scene`` to ``path`` as SVG, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(scene_to_svg(scene), encoding="utf-8")
    return path


__all__ = ["scene_to_svg", "write_svg"]
