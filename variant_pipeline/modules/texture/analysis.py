"""Brightness analysis of pixel grids used to pick recolor endpoints."""
from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from PIL import Image

from ...core.utils_color import OPAQUE_BLACK, OPAQUE_WHITE, Pixel
from ...core.utils_image import PixelGrid, as_grid, grayscale_mask, opaque_mask

LOGGER = logging.getLogger("variant_pipeline.texture.analysis")


@dataclass(frozen=True)
class ColorAnalysis:
    """Brightest and darkest eligible pixels of a scanned grid."""

    brightest: Pixel
    darkest: Pixel
    max_brightness: int
    min_brightness: int
    eligible_pixels: int = 0

    @property
    def is_empty(self) -> bool:
        return self.eligible_pixels == 0


def _pixel_from_row(row: np.ndarray) -> Pixel:
    r, g, b, a = (int(c) for c in row)
    return Pixel(r, g, b, a)


def analyze(grid: PixelGrid | Image.Image, grayscale_only: bool) -> ColorAnalysis:
    """Scan *grid* for its brightest and darkest non-transparent pixels.

    When *grayscale_only* is set, pixels whose channels differ are ignored as
    well. Ties keep the first pixel met in row-major order. Without any
    eligible pixel the result falls back to opaque white and opaque black,
    with the brightness extremes left at their ``-1`` / ``256`` sentinels.
    """

    rgba = as_grid(grid)
    mask = opaque_mask(rgba)
    if grayscale_only:
        mask &= grayscale_mask(rgba)

    flat = rgba.reshape(-1, 4)
    indices = np.flatnonzero(mask.reshape(-1))
    if indices.size == 0:
        analysis = ColorAnalysis(OPAQUE_WHITE, OPAQUE_BLACK, -1, 256, 0)
    else:
        eligible = flat[indices]
        levels = eligible[:, :3].astype(np.int32).sum(axis=1) // 3
        bright_idx = int(np.argmax(levels))
        dark_idx = int(np.argmin(levels))
        analysis = ColorAnalysis(
            brightest=_pixel_from_row(eligible[bright_idx]),
            darkest=_pixel_from_row(eligible[dark_idx]),
            max_brightness=int(levels[bright_idx]),
            min_brightness=int(levels[dark_idx]),
            eligible_pixels=int(indices.size),
        )

    LOGGER.debug(
        "%s analysis - brightest: %s (%s), darkest: %s (%s)",
        "Grayscale" if grayscale_only else "Color",
        analysis.max_brightness,
        analysis.brightest,
        analysis.min_brightness,
        analysis.darkest,
    )
    return analysis


def analyze_grayscale(grid: PixelGrid | Image.Image) -> ColorAnalysis:
    return analyze(grid, grayscale_only=True)


def analyze_colors(grid: PixelGrid | Image.Image) -> ColorAnalysis:
    return analyze(grid, grayscale_only=False)
