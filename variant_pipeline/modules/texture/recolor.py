"""Map grayscale pixels onto the color ramp between two reference colors."""
from __future__ import annotations

import logging

import numpy as np
from PIL import Image

from ...core.utils_color import Pixel
from ...core.utils_image import PixelGrid, as_grid, grayscale_mask, interpolate_levels, opaque_mask
from .analysis import analyze_colors

LOGGER = logging.getLogger("variant_pipeline.texture.recolor")


def recolor(grid: PixelGrid | Image.Image, bright_color: Pixel, dark_color: Pixel) -> PixelGrid:
    """Recolor grayscale pixels of *grid* between *dark_color* and *bright_color*.

    The red channel of each opaque grayscale pixel selects the position on the
    ramp: ``0`` maps to *dark_color* and ``255`` to *bright_color*, regardless
    of the range the source actually spans. Transparent and colored pixels are
    copied untouched and alpha is always preserved.
    """

    source = as_grid(grid)
    result = source.copy()
    mask = grayscale_mask(source) & opaque_mask(source)
    if np.any(mask):
        result[mask, :3] = interpolate_levels(source[mask, 0], dark_color, bright_color)

    LOGGER.debug(
        "Recolored %d pixels between %s and %s", int(np.count_nonzero(mask)), dark_color, bright_color
    )
    return result


def recolor_from_reference(grid: PixelGrid | Image.Image, reference: PixelGrid | Image.Image) -> PixelGrid:
    """Recolor *grid* using the brightest and darkest colors of *reference*."""

    palette = analyze_colors(reference)
    return recolor(grid, palette.brightest, palette.darkest)
