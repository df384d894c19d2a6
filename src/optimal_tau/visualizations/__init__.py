"""Render pipeline.

This module contains:
- Scene building (gridlines, circles, labels in device pixels)
- SVG serialization of scenes
"""

from optimal_tau.visualizations.scene import (
    CircleShape,
    Label,
    Line,
    Rect,
    Scene,
    Viewport,
    build_scene,
)
from optimal_tau.visualizations.svg import scene_to_svg, write_svg

__all__ = [
    "CircleShape",
    "Label",
    "Line",
    "Rect",
    "Scene",
    "Viewport",
    "build_scene",
    "scene_to_svg",
    "write_svg",
]
