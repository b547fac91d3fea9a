from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple
import math
import re
import numpy as np


_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def _round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def _clamp_channel(v: float) -> int:
    return max(0, min(255, _round_half_up(v)))


@dataclass(frozen=True)
class Color:
    """
    8-bit RGB color. Channels are integers in [0, 255].
    """
    r: int
    g: int
    b: int

    @staticmethod
    def from_hex(value: str) -> "Color":
        m = _HEX_RE.match(value.strip())
        if m is None:
            raise ValueError(f"invalid hex color: {value!r}")
        return Color(int(m.group(1), 16), int(m.group(2), 16), int(m.group(3), 16))

    @staticmethod
    def from_rgb(r: float, g: float, b: float) -> "Color":
        return Color(_clamp_channel(r), _clamp_channel(g), _clamp_channel(b))

    @staticmethod
    def from_hsl(h: float, s: float, l: float) -> "Color":
        """
        h in degrees [0, 360), s and l in percent [0, 100].
        """
        l = l / 100.0
        a = s * min(l, 1.0 - l) / 100.0

        def f(n: int) -> int:
            k = (n + h / 30.0) % 12
            c = l - a * max(min(k - 3, 9 - k, 1), -1)
            return _round_half_up(255 * c)

        return Color.from_rgb(f(0), f(8), f(4))

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def as_array(self) -> np.ndarray:
        return np.array([self.r, self.g, self.b], dtype=float)

    def as_unit_rgb(self) -> Tuple[float, float, float]:
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0)

    def __str__(self) -> str:
        return self.to_hex()


def as_color(value: "Color | str") -> Color:
    if isinstance(value, Color):
        return value
    return Color.from_hex(value)


def interpolate(color_a: Color, color_b: Color, t: float) -> Color:
    """
    Linear per-channel blend from color_a (t=0) to color_b (t=1), rounded half up.
    """
    t = min(1.0, max(0.0, float(t)))
    return Color(
        _round_half_up(color_a.r + (color_b.r - color_a.r) * t),
        _round_half_up(color_a.g + (color_b.g - color_a.g) * t),
        _round_half_up(color_a.b + (color_b.b - color_a.b) * t),
    )


def interpolate_array(color_a: Color, color_b: Color, t: np.ndarray) -> np.ndarray:
    """
    Vectorized interpolate(): t of shape (...) gives uint8 RGB of shape (..., 3).
    """
    t = np.clip(np.asarray(t, dtype=float), 0.0, 1.0)[..., None]
    a = color_a.as_array()
    b = color_b.as_array()
    rgb = np.floor(a + (b - a) * t + 0.5)
    return np.clip(rgb, 0, 255).astype(np.uint8)
