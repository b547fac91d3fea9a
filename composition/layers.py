from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional, Union
import logging

from shapes.color import Color, interpolate
from shapes.geometry import SHAPE_KINDS
from .config import DEFAULT_CONFIG, GeneratorConfig
from .params import ParameterSet


logger = logging.getLogger(__name__)

FillMode = Literal["solid", "texture", "gradient"]

# Per-layer seed offsets, so neighbouring layers never share a noise field.
TEXTURE_SEED_STEP = 123.456
GRADIENT_SEED_STEP = 789.123 + 234.567


def map_range(value: float, start1: float, stop1: float, start2: float, stop2: float) -> float:
    return start2 + (stop2 - start2) * ((value - start1) / (stop1 - start1))


def layer_rotation(index: int, layer_count: int, max_rotation: float) -> float:
    """
    Rotation in degrees: 0 at the outermost layer, rising towards max_rotation.

    The source domain ends at 1 although layer 1 is never generated, so the
    innermost layer (index 2) stops short of max_rotation. Kept for
    compatibility with earlier output.
    """
    if layer_count == 1:
        return 0.0
    return map_range(index, layer_count, 1, 0.0, max_rotation)


def layer_position(index: int, layer_count: int) -> float:
    """
    Normalized position t: 0 at the outermost layer, 1 at the innermost (index 2).
    """
    if layer_count <= 2:
        return 0.0
    return map_range(index, layer_count, 2, 0.0, 1.0)


@dataclass(frozen=True)
class SolidFill:
    color: Color
    mode: FillMode = "solid"


@dataclass(frozen=True)
class TextureFill:
    color: Color
    intensity: float
    scale: float
    octaves: int
    seed: float
    pattern_id: str
    mode: FillMode = "texture"


@dataclass(frozen=True)
class GradientFill:
    color_a: Color
    color_b: Color
    intensity: float
    scale: float
    octaves: int
    seed: float
    pattern_id: str
    mode: FillMode = "gradient"


FillRequest = Union[SolidFill, TextureFill, GradientFill]


@dataclass(frozen=True)
class ShadowSpec:
    multiplier: float
    blur: float
    offset_x: float
    offset_y: float
    opacity: float
    color: Color


@dataclass(frozen=True)
class LayerDescriptor:
    index: int
    shape_kind: str
    size: float
    rotation: float
    t: float
    color_a: Color
    color_b: Color
    fill: FillRequest
    shadow: Optional[ShadowSpec]

    @property
    def clip_id(self) -> str:
        """Id of the clip boundary derived from this layer for its inner neighbour."""
        return f"clip-{self.index}"


def resolve_fill_mode(params: ParameterSet) -> FillMode:
    """
    Exactly one fill mode per generation; gradient wins over texture.
    """
    if params.gradient.enabled:
        if params.texture.enabled:
            logger.warning("texture and gradient fills are exclusive, using gradient")
        return "gradient"
    if params.texture.enabled:
        return "texture"
    return "solid"


def layer_shadow(t: float, params: ParameterSet, config: GeneratorConfig = DEFAULT_CONFIG) -> Optional[ShadowSpec]:
    shadow = params.shadow
    if not shadow.enabled or shadow.blur <= 0:
        return None
    lo = config.shadow_min_multiplier
    multiplier = lo + t * (shadow.size_multiplier - lo)
    return ShadowSpec(
        multiplier=multiplier,
        blur=shadow.blur * multiplier,
        offset_x=shadow.offset_x * multiplier,
        offset_y=shadow.offset_y * multiplier,
        opacity=config.shadow_opacity,
        color=shadow.color,
    )


def _layer_fill(mode: FillMode, index: int, color_a: Color, color_b: Color, params: ParameterSet) -> FillRequest:
    if mode == "gradient":
        g = params.gradient
        return GradientFill(
            color_a=color_a,
            color_b=color_b,
            intensity=g.intensity,
            scale=g.scale,
            octaves=g.octaves,
            seed=g.seed + index * GRADIENT_SEED_STEP,
            pattern_id=f"noise-gradient-{index}",
        )
    base = interpolate(color_a, color_b, 0.5)
    if mode == "texture":
        tx = params.texture
        return TextureFill(
            color=base,
            intensity=tx.intensity,
            scale=tx.scale,
            octaves=tx.octaves,
            seed=tx.seed + index * TEXTURE_SEED_STEP,
            pattern_id=f"noise-pattern-{index}",
        )
    return SolidFill(color=base)


def build_layers(params: ParameterSet, config: GeneratorConfig = DEFAULT_CONFIG) -> List[LayerDescriptor]:
    """
    Layer descriptors for i = layer_count down to 2, outermost first.
    """
    n = int(params.layer_count)
    kind = params.shape_kind
    if kind not in SHAPE_KINDS:
        logger.warning("unknown shape kind %r, falling back to circle", kind)
        kind = "circle"
    mode = resolve_fill_mode(params)
    start_a, end_a = params.colors.pair_a
    start_b, end_b = params.colors.pair_b

    layers: List[LayerDescriptor] = []
    for i in range(n, 1, -1):
        t = layer_position(i, n)
        color_a = interpolate(start_a, end_a, t)
        color_b = interpolate(start_b, end_b, t)
        layers.append(
            LayerDescriptor(
                index=i,
                shape_kind=kind,
                size=i * params.layer_scale,
                rotation=layer_rotation(i, n, params.max_rotation),
                t=t,
                color_a=color_a,
                color_b=color_b,
                fill=_layer_fill(mode, i, color_a, color_b, params),
                shadow=layer_shadow(t, params, config),
            )
        )
    logger.debug("built %d layers (%s fill)", len(layers), mode)
    return layers
