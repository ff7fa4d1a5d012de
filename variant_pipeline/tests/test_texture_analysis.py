"""Tests for brightest/darkest pixel analysis."""
from __future__ import annotations

import pytest

pytest.importorskip("numpy")
import numpy as np
from PIL import Image

from variant_pipeline.core.utils_color import Pixel
from variant_pipeline.modules.texture import analyze, analyze_colors, analyze_grayscale


def _grid(rows: list[list[tuple[int, int, int, int]]]) -> np.ndarray:
    return np.array(rows, dtype=np.uint8)


def test_all_transparent_uses_defaults() -> None:
    grid = _grid([[(200, 200, 200, 0), (10, 10, 10, 0)]])
    for grayscale_only in (True, False):
        result = analyze(grid, grayscale_only)
        assert result.brightest == Pixel(255, 255, 255, 255)
        assert result.darkest == Pixel(0, 0, 0, 255)
        assert result.is_empty
        assert (result.max_brightness, result.min_brightness) == (-1, 256)


def test_empty_grid_uses_defaults() -> None:
    result = analyze(np.zeros((0, 0, 4), dtype=np.uint8), True)
    assert result.brightest == Pixel(255, 255, 255, 255)
    assert result.darkest == Pixel(0, 0, 0, 255)


def test_grayscale_only_skips_colored_pixels() -> None:
    grid = _grid([[(250, 10, 10, 255), (120, 120, 120, 255), (60, 60, 60, 255)]])
    gray = analyze_grayscale(grid)
    assert gray.brightest == Pixel(120, 120, 120, 255)
    assert gray.darkest == Pixel(60, 60, 60, 255)
    assert gray.eligible_pixels == 2

    colors = analyze_colors(grid)
    assert colors.brightest == Pixel(120, 120, 120, 255)
    assert colors.darkest == Pixel(60, 60, 60, 255)
    assert colors.eligible_pixels == 3


def test_ties_keep_first_in_row_major_order() -> None:
    grid = _grid(
        [
            [(0, 0, 0, 0), (30, 60, 90, 255)],
            [(60, 60, 60, 255), (90, 60, 30, 255)],
        ]
    )
    result = analyze(grid, grayscale_only=False)
    assert result.brightest == Pixel(30, 60, 90, 255)
    assert result.darkest == Pixel(30, 60, 90, 255)
    assert result.max_brightness == result.min_brightness == 60


def test_partial_alpha_counts_as_eligible() -> None:
    grid = _grid([[(240, 240, 240, 1), (20, 20, 20, 255)]])
    result = analyze(grid, grayscale_only=True)
    assert result.brightest == Pixel(240, 240, 240, 1)
    assert result.max_brightness == 240
    assert result.min_brightness == 20


def test_accepts_pillow_images() -> None:
    image = Image.new("RGBA", (3, 3), (90, 90, 90, 255))
    image.putpixel((1, 1), (200, 200, 200, 255))
    result = analyze(image, grayscale_only=True)
    assert result.brightest == Pixel(200, 200, 200, 255)
    assert result.darkest == Pixel(90, 90, 90, 255)
