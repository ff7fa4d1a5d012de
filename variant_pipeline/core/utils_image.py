"""Pixel grid helpers bridging Pillow images and NumPy RGBA arrays."""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
from PIL import Image

from .utils_color import Pixel

PixelGrid = np.ndarray


def as_grid(source: Image.Image | np.ndarray | Sequence) -> PixelGrid:
    """Return a fresh ``(height, width, 4)`` uint8 RGBA copy of *source*.

    Accepts Pillow images, 2-D grayscale arrays and RGB or RGBA arrays.
    Out-of-range channel values are clamped rather than rejected.
    """

    if isinstance(source, Image.Image):
        return np.array(source.convert("RGBA"), dtype=np.uint8)

    array = np.asarray(source)
    if array.ndim == 2:
        array = np.repeat(array[..., None], 3, axis=2)
    if array.ndim != 3 or array.shape[-1] not in (3, 4):
        raise ValueError(f"Unsupported pixel grid shape: {array.shape}")
    if array.dtype != np.uint8:
        array = np.clip(np.rint(array.astype(np.float64)), 0, 255).astype(np.uint8)
    if array.shape[-1] == 3:
        alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
        array = np.concatenate([array, alpha], axis=2)
    return np.array(array, dtype=np.uint8, copy=True)


def grid_to_image(grid: PixelGrid) -> Image.Image:
    """Convert an RGBA grid back into a Pillow image."""

    return Image.fromarray(as_grid(grid), mode="RGBA")


def grayscale_mask(grid: PixelGrid) -> np.ndarray:
    """Boolean mask of pixels whose red, green and blue channels match."""

    return (grid[..., 0] == grid[..., 1]) & (grid[..., 1] == grid[..., 2])


def opaque_mask(grid: PixelGrid) -> np.ndarray:
    """Boolean mask of pixels that are not fully transparent."""

    return grid[..., 3] > 0


def load_grid(path: Path | str) -> PixelGrid:
    with Image.open(path) as img:
        return as_grid(img)


def interpolate_levels(levels: np.ndarray, start: Pixel, end: Pixel) -> np.ndarray:
    """Map 8-bit *levels* onto the RGB ramp from *start* (0) to *end* (255).

    Results are truncated toward zero, returning an ``(N, 3)`` uint8 array.
    """

    start_rgb = np.array((start.r, start.g, start.b), dtype=np.float64)
    end_rgb = np.array((end.r, end.g, end.b), dtype=np.float64)
    # level * delta / 255 keeps the endpoints exact for integer levels
    values = start_rgb + levels[:, None].astype(np.float64) * (end_rgb - start_rgb) / 255.0
    return np.clip(np.trunc(values), 0, 255).astype(np.uint8)
