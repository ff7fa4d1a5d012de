"""Tonal transforms: HSL adjustment, gamma-corrected brightness and gap filling."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np
from PIL import Image

from ...core.utils_color import Pixel
from ...core.utils_image import PixelGrid, as_grid, grayscale_mask, interpolate_levels, opaque_mask

LOGGER = logging.getLogger("variant_pipeline.texture.tonal")

MIN_GAMMA = 0.1


@dataclass(frozen=True)
class TonalProfile:
    """Optional post-recolor adjustments attached to a tier palette."""

    hue_shift: float = 0.0
    saturation: float = 1.0
    lightness: float = 0.0
    brightness: float = 1.0
    gamma: float = 1.0

    @property
    def adjusts_hsl(self) -> bool:
        return self.hue_shift % 360.0 != 0.0 or self.saturation != 1.0 or self.lightness != 0.0

    @property
    def adjusts_brightness(self) -> bool:
        return self.brightness != 1.0 or self.gamma != 1.0


NEUTRAL_PROFILE = TonalProfile()


def _rgb_to_hls_array(rgb: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Vectorized RGB→HLS conversion for arrays in range [0, 1]."""

    maxc = rgb.max(axis=-1)
    minc = rgb.min(axis=-1)
    delta = maxc - minc
    sumc = maxc + minc

    l = 0.5 * sumc

    s = np.zeros_like(maxc)
    chromatic = delta > 0.0
    low = chromatic & (l <= 0.5)
    high = chromatic & (l > 0.5)
    s[low] = delta[low] / sumc[low]
    s[high] = delta[high] / (2.0 - sumc[high])

    h = np.zeros_like(maxc)
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    denom = np.where(chromatic, delta, 1.0)
    rc = (maxc - r) / denom
    gc = (maxc - g) / denom
    bc = (maxc - b) / denom

    red_mask = chromatic & (maxc == r)
    green_mask = chromatic & (maxc == g) & ~red_mask
    blue_mask = chromatic & ~red_mask & ~green_mask

    h[red_mask] = bc[red_mask] - gc[red_mask]
    h[green_mask] = 2.0 + rc[green_mask] - bc[green_mask]
    h[blue_mask] = 4.0 + gc[blue_mask] - rc[blue_mask]

    h = np.mod(h / 6.0, 1.0)
    return h, l, s


def _hls_to_rgb_array(h: np.ndarray, l: np.ndarray, s: np.ndarray) -> np.ndarray:
    """Vectorized HLS→RGB conversion for arrays in range [0, 1]."""

    h = np.mod(h, 1.0)
    s = np.clip(s, 0.0, 1.0)
    l = np.clip(l, 0.0, 1.0)

    m2 = np.where(l <= 0.5, l * (1.0 + s), l + s - l * s)
    m1 = 2.0 * l - m2

    def _hue_to_rgb(hue: np.ndarray) -> np.ndarray:
        hue = np.mod(hue, 1.0)
        result = m1.copy()

        cond1 = hue < (1.0 / 6.0)
        cond2 = (hue >= (1.0 / 6.0)) & (hue < 0.5)
        cond3 = (hue >= 0.5) & (hue < (2.0 / 3.0))

        result[cond1] = m1[cond1] + (m2[cond1] - m1[cond1]) * hue[cond1] * 6.0
        result[cond2] = m2[cond2]
        result[cond3] = m1[cond3] + (m2[cond3] - m1[cond3]) * ((2.0 / 3.0) - hue[cond3]) * 6.0
        return np.clip(result, 0.0, 1.0)

    r = _hue_to_rgb(h + (1.0 / 3.0))
    g = _hue_to_rgb(h)
    b = _hue_to_rgb(h - (1.0 / 3.0))
    return np.stack((r, g, b), axis=-1)


def _to_channels(values: np.ndarray) -> np.ndarray:
    """Scale unit floats to 8-bit channels rounding half up."""

    return np.clip(np.floor(np.clip(values, 0.0, 1.0) * 255.0 + 0.5), 0, 255).astype(np.uint8)


def transform_hsl(
    grid: PixelGrid | Image.Image,
    hue_shift: float,
    saturation: float,
    lightness: float,
) -> PixelGrid:
    """Rotate hue by *hue_shift* degrees, scale saturation and offset lightness.

    Saturation and lightness results are clamped into ``[0, 1]``; transparent
    pixels are copied as they are.
    """

    source = as_grid(grid)
    result = source.copy()
    mask = opaque_mask(source)
    if np.any(mask):
        rgb = source[mask, :3].astype(np.float64) / 255.0
        h, l, s = _rgb_to_hls_array(rgb)
        h = np.mod(h * 360.0 + hue_shift, 360.0) / 360.0
        s = np.clip(s * saturation, 0.0, 1.0)
        l = np.clip(l + lightness, 0.0, 1.0)
        result[mask, :3] = _to_channels(_hls_to_rgb_array(h, l, s))

    LOGGER.debug(
        "Applied HSL transformation: hue_shift=%s, saturation=%s, lightness=%s", hue_shift, saturation, lightness
    )
    return result


def adjust_brightness(grid: PixelGrid | Image.Image, brightness_multiplier: float, gamma: float) -> PixelGrid:
    """Apply gamma correction followed by a brightness multiplier per channel."""

    source = as_grid(grid)
    result = source.copy()
    mask = opaque_mask(source)
    if np.any(mask):
        normalized = source[mask, :3].astype(np.float64) / 255.0
        corrected = np.power(normalized, 1.0 / max(MIN_GAMMA, gamma))
        result[mask, :3] = _to_channels(corrected * brightness_multiplier)

    LOGGER.debug("Adjusted brightness: multiplier=%s, gamma=%s", brightness_multiplier, gamma)
    return result


def fill_missing_colors(grid: PixelGrid | Image.Image, min_color: Pixel, max_color: Pixel) -> PixelGrid:
    """Fill grayscale pixels with the ramp running from *min_color* to *max_color*.

    Level ``0`` maps to *min_color*, the reverse of :func:`recolor`, whose
    level ``0`` endpoint is its second (dark) argument.
    """

    source = as_grid(grid)
    result = source.copy()
    mask = grayscale_mask(source) & opaque_mask(source)
    if np.any(mask):
        result[mask, :3] = interpolate_levels(source[mask, 0], min_color, max_color)

    LOGGER.debug("Generated missing colors for %d pixels", int(np.count_nonzero(mask)))
    return result


def apply_tonal_profile(grid: PixelGrid | Image.Image, profile: TonalProfile) -> PixelGrid:
    """Run the HSL and brightness transforms that *profile* does not leave neutral."""

    result = as_grid(grid)
    if profile.adjusts_hsl:
        result = transform_hsl(result, profile.hue_shift, profile.saturation, profile.lightness)
    if profile.adjusts_brightness:
        result = adjust_brightness(result, profile.brightness, profile.gamma)
    return result
