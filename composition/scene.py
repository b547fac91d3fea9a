from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import logging
import numpy as np
from shapely.geometry.base import BaseGeometry

from shapes.geometry import Boundary, make_boundary
from texture.patterns import Tile, TileCache, synthesize_gradient_tile, synthesize_texture_tile, tile_cache_key
from .clipping import ClipBoundary, resolve_clips
from .config import DEFAULT_CONFIG, GeneratorConfig
from .layers import FillRequest, GradientFill, LayerDescriptor, TextureFill, build_layers
from .params import ParameterSet
from .shadow import FilterCache, ShadowFilter
from .warp import WarpField, apply_warp


logger = logging.getLogger(__name__)


class RenderCaches:
    """
    Tile and shadow-filter caches for one canvas. Reset at every generation.
    """

    def __init__(self, config: GeneratorConfig = DEFAULT_CONFIG):
        self.config = config
        self.tiles = TileCache(config.tile_cache_capacity)
        self.filters = FilterCache(config.filter_cache_capacity)

    def reset(self) -> None:
        self.tiles.clear()
        self.filters.clear()

    def tile_for(self, fill: FillRequest) -> Optional[Tile]:
        cfg = self.config
        if isinstance(fill, TextureFill):
            key = tile_cache_key(
                "texture", (fill.color,), fill.intensity, fill.scale, fill.octaves,
                cfg.texture_tile_size, cfg.tile_color_bucket,
            )
            tile = self.tiles.get(key)
            if tile is None:
                tile = synthesize_texture_tile(
                    fill.color, fill.intensity, fill.scale, fill.octaves, fill.seed, cfg.texture_tile_size
                )
                self.tiles.put(key, tile)
            return tile
        if isinstance(fill, GradientFill):
            key = tile_cache_key(
                "gradient", (fill.color_a, fill.color_b), fill.intensity, fill.scale, fill.octaves,
                cfg.gradient_tile_size, cfg.tile_color_bucket,
            )
            tile = self.tiles.get(key)
            if tile is None:
                tile = synthesize_gradient_tile(
                    fill.color_a, fill.color_b, fill.intensity, fill.scale, fill.octaves, fill.seed,
                    cfg.gradient_tile_size,
                )
                self.tiles.put(key, tile)
            return tile
        return None


@dataclass
class SceneLayer:
    descriptor: LayerDescriptor
    boundary: Boundary
    pattern_id: Optional[str] = None
    filter_id: Optional[str] = None
    clip_id: Optional[str] = None

    @property
    def index(self) -> int:
        return self.descriptor.index


@dataclass
class Scene:
    """
    Renderable result of one generation: layers outermost first, plus every
    tile, filter and clip they reference by id.
    """
    width: float
    height: float
    layers: List[SceneLayer]
    warp_field: WarpField
    tiles: Dict[str, Tile] = field(default_factory=dict)
    filters: Dict[str, ShadowFilter] = field(default_factory=dict)
    clips: Dict[str, ClipBoundary] = field(default_factory=dict)
    global_clip: Optional[ClipBoundary] = None

    def layer(self, index: int) -> SceneLayer:
        for layer in self.layers:
            if layer.index == index:
                return layer
        raise KeyError(index)

    def groups(self) -> List[Tuple[Optional[str], SceneLayer]]:
        """
        Draw order inside the global clip group: (clip id or None, layer).
        """
        return [(layer.clip_id, layer) for layer in self.layers]

    def visible_region(self, layer: SceneLayer) -> BaseGeometry:
        """
        Part of a layer's warped outline that survives its clip and the global clip.
        """
        region = layer.boundary.to_shapely()
        if layer.clip_id is not None and layer.clip_id in self.clips:
            region = region.intersection(self.clips[layer.clip_id].to_shapely())
        if self.global_clip is not None:
            region = region.intersection(self.global_clip.to_shapely())
        return region


def generate_scene(
    params: ParameterSet,
    config: GeneratorConfig = DEFAULT_CONFIG,
    rng: Optional[np.random.Generator] = None,
    caches: Optional[RenderCaches] = None,
    warp_field: Optional[WarpField] = None,
) -> Scene:
    """
    Build the complete scene from scratch:
    layers -> tiles/filters -> nominal outlines -> warp -> clips.

    `warp_field` overrides the randomly drawn field, which makes the output
    fully reproducible.
    """
    if caches is None:
        caches = RenderCaches(config)
    caches.reset()

    descriptors = build_layers(params, config)
    tiles: Dict[str, Tile] = {}
    filters: Dict[str, ShadowFilter] = {}
    layers: List[SceneLayer] = []
    for d in descriptors:
        boundary = make_boundary(d.shape_kind, d.size, config.center, d.rotation, config.circle_points)
        layer = SceneLayer(descriptor=d, boundary=boundary)
        tile = caches.tile_for(d.fill)
        if tile is not None:
            layer.pattern_id = d.fill.pattern_id  # type: ignore[union-attr]
            tiles[layer.pattern_id] = tile
        if d.shadow is not None:
            shadow_filter = caches.filters.filter_for(d.shadow)
            filters[shadow_filter.id] = shadow_filter
            layer.filter_id = shadow_filter.id
        layers.append(layer)
    logger.debug("tile cache: %d hits, %d misses", caches.tiles.hits, caches.tiles.misses)

    if warp_field is None:
        if rng is None:
            rng = np.random.default_rng()
        warp_field = WarpField.draw(
            rng, params.chaos_x, params.chaos_y, config.canvas_width, config.canvas_height, config.warp_radius_range
        )
    apply_warp([layer.boundary for layer in layers], warp_field)

    resolution = resolve_clips([(layer.index, layer.boundary) for layer in layers], config.clip_scale_factor)
    for layer in layers:
        layer.clip_id = resolution.assignments.get(layer.index)

    return Scene(
        width=config.canvas_width,
        height=config.canvas_height,
        layers=layers,
        warp_field=warp_field,
        tiles=tiles,
        filters=filters,
        clips=dict(resolution.clips),
        global_clip=resolution.global_clip,
    )
