from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Hashable, Literal, Optional, Tuple
import base64
import io
import logging
import numpy as np
from PIL import Image

from shapes.color import Color, interpolate_array
from .noise import SimplexNoise, clamp_octaves


logger = logging.getLogger(__name__)

TileKind = Literal["texture", "gradient"]


@dataclass(frozen=True)
class Tile:
    """
    Square RGB raster meant to be repeated as a fill pattern.
    """
    kind: TileKind
    pixels: np.ndarray  # shape (size, size, 3), uint8

    @property
    def size(self) -> int:
        return int(self.pixels.shape[0])

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels)

    def to_png_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.to_image().save(buffer, format="PNG")
        return buffer.getvalue()

    def to_data_uri(self) -> str:
        encoded = base64.b64encode(self.to_png_bytes()).decode("ascii")
        return f"data:image/png;base64,{encoded}"


def _check_scale(scale: float) -> float:
    scale = float(scale)
    if scale <= 0.0:
        raise ValueError(f"noise scale must be positive, got {scale}")
    return scale


def _tile_grid(size: int) -> Tuple[np.ndarray, np.ndarray]:
    coords = np.arange(int(size), dtype=float)
    return np.meshgrid(coords, coords)


def synthesize_texture_tile(
    base_color: Color,
    intensity: float,
    scale: float,
    octaves: int,
    seed: float,
    size: int = 200,
) -> Tile:
    """
    Flat color perturbed per pixel by fractal noise.

    intensity is a percentage: 100 lets the perturbation swing each channel by
    up to +/-127.5 around the base color; 0 yields the plain base color.
    """
    scale = _check_scale(scale)
    noise = SimplexNoise(seed)
    X, Y = _tile_grid(size)
    n = noise.fractal(X / scale, Y / scale, clamp_octaves(octaves))
    effect = (n - 0.5) * (float(intensity) / 100.0)
    rgb = base_color.as_array()[None, None, :] + effect[..., None] * 255.0
    pixels = np.clip(np.floor(rgb + 0.5), 0, 255).astype(np.uint8)
    return Tile(kind="texture", pixels=pixels)


def synthesize_gradient_tile(
    color_a: Color,
    color_b: Color,
    intensity: float,
    scale: float,
    octaves: int,
    seed: float,
    size: int = 256,
) -> Tile:
    """
    Radial gradient from color_a (center) to color_b (rim) whose interpolation
    position is pushed around by fractal noise.
    """
    scale = _check_scale(scale)
    noise = SimplexNoise(seed)
    X, Y = _tile_grid(size)
    center = size / 2.0
    distance = np.sqrt((X - center) ** 2 + (Y - center) ** 2)
    normalized = np.minimum(1.0, distance / center)
    n = noise.fractal(X / scale, Y / scale, clamp_octaves(octaves))
    distortion = (float(intensity) / 100.0) * 0.6
    t = np.clip(normalized + (n - 0.5) * distortion, 0.0, 1.0)
    return Tile(kind="gradient", pixels=interpolate_array(color_a, color_b, t))


def _bucket(value: float, step: float) -> float:
    return round(float(value) / step) * step


def bucket_color(color: Color, step: int) -> Tuple[int, int, int]:
    if step <= 1:
        return color.as_tuple()
    return tuple(int(round(c / step)) * step for c in color.as_tuple())  # type: ignore[return-value]


def tile_cache_key(
    kind: TileKind,
    colors: Tuple[Color, ...],
    intensity: float,
    scale: float,
    octaves: int,
    size: int,
    color_step: int = 4,
) -> Tuple[Hashable, ...]:
    """
    Bucketed key: nearby parameter sets share one synthesized tile.
    """
    return (
        kind,
        tuple(bucket_color(c, color_step) for c in colors),
        _bucket(scale, 10),
        _bucket(intensity, 10),
        clamp_octaves(octaves),
        int(size),
    )


class TileCache:
    """
    Bounded FIFO cache of synthesized tiles, scoped to one scene rebuild.
    """

    def __init__(self, capacity: int = 10):
        self.capacity = max(1, int(capacity))
        self._items: "OrderedDict[Tuple[Hashable, ...], Tile]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: Tuple[Hashable, ...]) -> bool:
        return key in self._items

    def get(self, key: Tuple[Hashable, ...]) -> Optional[Tile]:
        tile = self._items.get(key)
        if tile is None:
            self.misses += 1
        else:
            self.hits += 1
        return tile

    def put(self, key: Tuple[Hashable, ...], tile: Tile) -> None:
        if key not in self._items and len(self._items) >= self.capacity:
            evicted, _ = self._items.popitem(last=False)
            logger.debug("tile cache full, evicted %s", evicted)
        self._items[key] = tile

    def clear(self) -> None:
        self._items.clear()
        self.hits = 0
        self.misses = 0
