from __future__ import annotations

import numpy as np

from shapes.color import Color
from shapes.geometry import SHAPE_KINDS
from .config import DEFAULT_LIMITS, ParameterLimits, Range
from .params import ColorStops, GradientParams, ParameterSet, ShadowParams, TextureParams


def _rand_int(rng: np.random.Generator, r: Range) -> int:
    return int(rng.integers(int(r.random_min), int(r.random_max)))


def _rand_float(rng: np.random.Generator, r: Range) -> float:
    return float(rng.uniform(r.random_min, r.random_max))


def random_palette(rng: np.random.Generator) -> ColorStops:
    """
    Close hues on the edge pair, complementary hues on the center pair.
    """
    hue_1a = float(rng.integers(0, 360))
    hue_1b = (hue_1a + rng.integers(30, 90)) % 360
    hue_2a = (hue_1a + rng.integers(120, 240)) % 360
    hue_2b = (hue_2a + rng.integers(30, 90)) % 360
    return ColorStops(
        start=Color.from_hsl(hue_1a, 70, 60),
        end=Color.from_hsl(float(hue_2a), 70, 60),
        start_b=Color.from_hsl(float(hue_1b), 70, 60),
        end_b=Color.from_hsl(float(hue_2b), 70, 60),
    )


def random_parameters(
    rng: np.random.Generator,
    limits: ParameterLimits = DEFAULT_LIMITS,
    gradient: bool = False,
) -> ParameterSet:
    kind = str(rng.choice(SHAPE_KINDS))
    texture = TextureParams(
        enabled=bool(rng.random() < limits.texture_probability) and not gradient,
        intensity=_rand_int(rng, limits.texture_intensity),
        scale=_rand_int(rng, limits.texture_scale),
        octaves=_rand_int(rng, limits.octaves),
        seed=float(rng.integers(0, 1000)),
    )
    shadow = ShadowParams(
        enabled=bool(rng.random() < limits.shadow_probability),
        offset_x=_rand_float(rng, limits.shadow_offset),
        offset_y=_rand_float(rng, limits.shadow_offset),
        blur=_rand_int(rng, limits.shadow_blur),
        size_multiplier=_rand_float(rng, limits.shadow_size),
        color=Color.from_hsl(float(rng.integers(0, 360)), float(rng.integers(20, 80)), float(rng.integers(10, 40))),
    )
    gradient_params = GradientParams(
        enabled=gradient,
        intensity=_rand_int(rng, limits.gradient_intensity),
        scale=_rand_int(rng, limits.gradient_scale),
        octaves=_rand_int(rng, limits.octaves),
        seed=float(rng.integers(0, 1000)),
    )
    return ParameterSet(
        shape_kind=kind,
        layer_count=_rand_int(rng, limits.layer_count),
        layer_scale=_rand_int(rng, limits.layer_scale),
        max_rotation=_rand_int(rng, limits.rotation),
        chaos_x=_rand_int(rng, limits.chaos),
        chaos_y=_rand_int(rng, limits.chaos),
        colors=random_palette(rng),
        texture=texture,
        shadow=shadow,
        gradient=gradient_params,
    )
