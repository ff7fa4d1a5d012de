"""Grayscale texture recoloring and tonal adjustment."""
from __future__ import annotations

from .analysis import ColorAnalysis, analyze, analyze_colors, analyze_grayscale
from .recolor import recolor, recolor_from_reference
from .tonal import (
    NEUTRAL_PROFILE,
    TonalProfile,
    adjust_brightness,
    apply_tonal_profile,
    fill_missing_colors,
    transform_hsl,
)

__all__ = [
    "ColorAnalysis",
    "analyze",
    "analyze_colors",
    "analyze_grayscale",
    "recolor",
    "recolor_from_reference",
    "NEUTRAL_PROFILE",
    "TonalProfile",
    "adjust_brightness",
    "apply_tonal_profile",
    "fill_missing_colors",
    "transform_hsl",
]
