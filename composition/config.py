from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from .params import ParameterSet


@dataclass(frozen=True)
class GeneratorConfig:
    canvas_width: float = 800.0
    canvas_height: float = 800.0
    circle_points: int = 48
    texture_tile_size: int = 200
    gradient_tile_size: int = 256
    clip_scale_factor: float = 0.90
    tile_cache_capacity: int = 10
    filter_cache_capacity: int = 10
    tile_color_bucket: int = 4
    shadow_min_multiplier: float = 0.5
    shadow_opacity: float = 0.7
    warp_radius_range: Tuple[int, int] = (24, 64)

    @property
    def center(self) -> Tuple[float, float]:
        return (self.canvas_width / 2.0, self.canvas_height / 2.0)


@dataclass(frozen=True)
class Range:
    min: float
    max: float
    random_min: float
    random_max: float

    def clamp(self, v: float) -> float:
        return self.min if v < self.min else self.max if v > self.max else v


@dataclass(frozen=True)
class ParameterLimits:
    """
    Slider ranges of the interactive tool and the narrower ranges used when randomizing.
    """
    rotation: Range = Range(0, 35, 5, 30)
    layer_count: Range = Range(3, 20, 8, 15)
    layer_scale: Range = Range(5, 100, 10, 50)
    chaos: Range = Range(0, 100, 20, 80)
    texture_intensity: Range = Range(0, 100, 30, 70)
    texture_scale: Range = Range(20, 200, 50, 120)
    octaves: Range = Range(1, 6, 2, 5)
    gradient_intensity: Range = Range(0, 100, 30, 70)
    gradient_scale: Range = Range(20, 200, 50, 120)
    shadow_offset: Range = Range(-10, 10, -2.5, 2.5)
    shadow_blur: Range = Range(0, 50, 5, 30)
    shadow_size: Range = Range(1, 5, 1.5, 4.0)
    texture_probability: float = 0.7
    shadow_probability: float = 0.7


DEFAULT_CONFIG = GeneratorConfig()
DEFAULT_LIMITS = ParameterLimits()


def clamp_parameters(params: ParameterSet, limits: ParameterLimits = DEFAULT_LIMITS) -> ParameterSet:
    """
    Copy of `params` with every numeric field inside its documented range.

    The layer count never drops below 2 and noise scales stay positive even if
    the limits allow otherwise.
    """
    texture = replace(
        params.texture,
        intensity=limits.texture_intensity.clamp(params.texture.intensity),
        scale=max(1e-3, limits.texture_scale.clamp(params.texture.scale)),
        octaves=int(limits.octaves.clamp(int(params.texture.octaves))),
    )
    gradient = replace(
        params.gradient,
        intensity=limits.gradient_intensity.clamp(params.gradient.intensity),
        scale=max(1e-3, limits.gradient_scale.clamp(params.gradient.scale)),
        octaves=int(limits.octaves.clamp(int(params.gradient.octaves))),
    )
    shadow = replace(
        params.shadow,
        offset_x=limits.shadow_offset.clamp(params.shadow.offset_x),
        offset_y=limits.shadow_offset.clamp(params.shadow.offset_y),
        blur=limits.shadow_blur.clamp(params.shadow.blur),
        size_multiplier=limits.shadow_size.clamp(params.shadow.size_multiplier),
    )
    return replace(
        params,
        layer_count=max(2, int(limits.layer_count.clamp(int(params.layer_count)))),
        layer_scale=max(1e-3, limits.layer_scale.clamp(params.layer_scale)),
        max_rotation=limits.rotation.clamp(params.max_rotation),
        chaos_x=limits.chaos.clamp(params.chaos_x),
        chaos_y=limits.chaos.clamp(params.chaos_y),
        texture=texture,
        gradient=gradient,
        shadow=shadow,
    )
