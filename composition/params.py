from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from shapes.color import Color, as_color


@dataclass(frozen=True)
class ColorStops:
    """
    Edge colors (outermost layer) and center colors (innermost layer).

    The second pair is only used by four-color mode; without it both pairs
    are the same and every layer has a single flat color.
    """
    start: Color
    end: Color
    start_b: Optional[Color] = None
    end_b: Optional[Color] = None

    @staticmethod
    def from_hex(start: str, end: str, start_b: Optional[str] = None, end_b: Optional[str] = None) -> "ColorStops":
        return ColorStops(
            start=as_color(start),
            end=as_color(end),
            start_b=None if start_b is None else as_color(start_b),
            end_b=None if end_b is None else as_color(end_b),
        )

    @property
    def pair_a(self) -> Tuple[Color, Color]:
        return self.start, self.end

    @property
    def pair_b(self) -> Tuple[Color, Color]:
        return (
            self.start if self.start_b is None else self.start_b,
            self.end if self.end_b is None else self.end_b,
        )


@dataclass(frozen=True)
class TextureParams:
    enabled: bool = False
    intensity: float = 10.0
    scale: float = 50.0
    octaves: int = 3
    seed: float = 0.0


@dataclass(frozen=True)
class ShadowParams:
    enabled: bool = False
    offset_x: float = 1.0
    offset_y: float = 1.0
    blur: float = 4.0
    size_multiplier: float = 2.0
    color: Color = Color(0, 0, 0)


@dataclass(frozen=True)
class GradientParams:
    enabled: bool = False
    intensity: float = 50.0
    scale: float = 80.0
    octaves: int = 4
    seed: float = 0.0


def _default_colors() -> ColorStops:
    return ColorStops.from_hex("#1d3557", "#f1faee")


@dataclass(frozen=True)
class ParameterSet:
    """
    Everything one generation call needs. Immutable; use dataclasses.replace to vary.
    """
    shape_kind: str = "circle"
    layer_count: int = 10
    layer_scale: float = 20.0
    max_rotation: float = 15.0
    chaos_x: float = 30.0
    chaos_y: float = 30.0
    colors: ColorStops = field(default_factory=_default_colors)
    texture: TextureParams = TextureParams()
    shadow: ShadowParams = ShadowParams()
    gradient: GradientParams = GradientParams()
