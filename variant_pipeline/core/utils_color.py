"""Color model helpers: packed pixels and RGB/HSL conversion."""
from __future__ import annotations

import colorsys
import math
from dataclasses import dataclass
from typing import Sequence, Tuple

from PIL import ImageColor

ColorTuple = Tuple[int, int, int]
RGBATuple = Tuple[int, int, int, int]


def clamp(value: float, min_value: float, max_value: float) -> float:
    """Clamp *value* between *min_value* and *max_value*."""

    return max(min_value, min(max_value, value))


def _channel(value: float) -> int:
    return int(clamp(int(value), 0, 255))


@dataclass(frozen=True)
class Pixel:
    """A single RGBA pixel with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            object.__setattr__(self, name, _channel(getattr(self, name)))

    @property
    def is_grayscale(self) -> bool:
        return self.r == self.g == self.b

    @property
    def brightness(self) -> int:
        return (self.r + self.g + self.b) // 3

    def pack(self) -> int:
        """Return the packed 32-bit ARGB value."""

        return (self.a << 24) | (self.r << 16) | (self.g << 8) | self.b

    @classmethod
    def unpack(cls, value: int) -> "Pixel":
        return cls(
            (value >> 16) & 0xFF,
            (value >> 8) & 0xFF,
            value & 0xFF,
            (value >> 24) & 0xFF,
        )

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "Pixel":
        """Build a pixel from an RGB or RGBA sequence, alpha defaulting to opaque."""

        channels = [int(round(float(v))) for v in values[:4]]
        if len(channels) < 3:
            raise ValueError(f"Expected at least three channels, got {values!r}")
        if len(channels) == 3:
            channels.append(255)
        return cls(*channels)

    def as_tuple(self) -> RGBATuple:
        return (self.r, self.g, self.b, self.a)

    def __str__(self) -> str:
        return f"({self.r},{self.g},{self.b},{self.a})"


OPAQUE_WHITE = Pixel(255, 255, 255, 255)
OPAQUE_BLACK = Pixel(0, 0, 0, 255)


def pack(pixel: Pixel) -> int:
    return pixel.pack()


def unpack(value: int) -> Pixel:
    return Pixel.unpack(value)


def brightness(pixel: Pixel) -> int:
    return pixel.brightness


def is_grayscale(pixel: Pixel) -> bool:
    return pixel.is_grayscale


def rgb_to_hsl(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """Convert 8-bit RGB channels to ``(hue degrees, saturation, lightness)``.

    Hue lies in ``[0, 360)``; saturation and lightness in ``[0, 1]``. Achromatic
    colors report a hue and saturation of zero.
    """

    rf, gf, bf = (clamp(c, 0, 255) / 255.0 for c in (r, g, b))
    h, l, s = colorsys.rgb_to_hls(rf, gf, bf)
    return (h * 360.0) % 360.0, s, l


def hsl_to_rgb(h: float, s: float, l: float) -> ColorTuple:
    """Convert ``(hue degrees, saturation, lightness)`` back to 8-bit RGB.

    Saturation and lightness are clamped into ``[0, 1]`` and hue wraps modulo
    360 so malformed input still produces a valid color.
    """

    hue = (h % 360.0) / 360.0
    r, g, b = colorsys.hls_to_rgb(hue, clamp(l, 0.0, 1.0), clamp(s, 0.0, 1.0))
    return tuple(int(clamp(math.floor(channel * 255.0 + 0.5), 0, 255)) for channel in (r, g, b))  # type: ignore[return-value]


def parse_color(value: str | Sequence[int] | Pixel) -> Pixel:
    """Parse arbitrary color input into a :class:`Pixel`."""

    if isinstance(value, Pixel):
        return value
    if isinstance(value, str):
        return Pixel.from_sequence(ImageColor.getrgb(value))
    return Pixel.from_sequence(value)
