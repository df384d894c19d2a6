"""Data module for settings snapshots and render style defaults."""

from optimal_tau.data.settings import (
    DEFAULT_SETTINGS,
    EDITABLE_KEYS,
    TAU_KEYS,
    Settings,
)
from optimal_tau.data.style import DEFAULT_STYLE, Margins, RenderStyle

__all__ = [
    "DEFAULT_SETTINGS",
    "DEFAULT_STYLE",
    "EDITABLE_KEYS",
    "Margins",
    "RenderStyle",
    "Settings",
    "TAU_KEYS",
]
