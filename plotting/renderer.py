from __future__ import annotations

from typing import List, Optional
import io
import math
import os
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import PathPatch
from matplotlib.path import Path
from PIL import Image
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry

from composition.scene import Scene
from texture.patterns import Tile
from plotting.vectorizer import save_scene_as_svg


def _polygons(geom: BaseGeometry) -> List[Polygon]:
    if geom.is_empty:
        return []
    if isinstance(geom, Polygon):
        return [geom]
    out: List[Polygon] = []
    for part in getattr(geom, "geoms", []):
        out.extend(_polygons(part))
    return out


def region_to_path(geom: BaseGeometry) -> Optional[Path]:
    """
    Matplotlib path for a (multi)polygon, holes included. None when empty.
    """
    vertices: List[np.ndarray] = []
    codes: List[int] = []
    for poly in _polygons(geom):
        for ring in [poly.exterior, *poly.interiors]:
            coords = np.asarray(ring.coords, dtype=float)
            if coords.shape[0] < 4:
                continue
            vertices.append(coords)
            codes.extend([Path.MOVETO] + [Path.LINETO] * (coords.shape[0] - 2) + [Path.CLOSEPOLY])
    if not vertices:
        return None
    return Path(np.concatenate(vertices), codes)


def tiled_pixels(tile: Tile, width: float, height: float) -> np.ndarray:
    """
    Repeat a tile from the canvas origin until it covers width x height.
    """
    w = int(math.ceil(width))
    h = int(math.ceil(height))
    reps_x = int(math.ceil(w / tile.size))
    reps_y = int(math.ceil(h / tile.size))
    return np.tile(tile.pixels, (reps_y, reps_x, 1))[:h, :w]


def draw_scene_on_axis(ax: plt.Axes, scene: Scene) -> None:
    """
    Raster preview of a scene: clipped layer regions with flat or tiled fills.
    Inner shadows are left to the SVG export.
    """
    for _, layer in scene.groups():
        path = region_to_path(scene.visible_region(layer))
        if path is None:
            continue
        if layer.pattern_id is not None:
            pixels = tiled_pixels(scene.tiles[layer.pattern_id], scene.width, scene.height)
            image = ax.imshow(
                pixels,
                extent=(0, pixels.shape[1], pixels.shape[0], 0),
                origin="upper",
                interpolation="nearest",
            )
            clip = PathPatch(path, transform=ax.transData, facecolor="none", edgecolor="none")
            image.set_clip_path(clip)
        else:
            rgb = layer.descriptor.fill.color.as_unit_rgb()  # type: ignore[union-attr]
            ax.add_patch(PathPatch(path, facecolor=rgb, edgecolor="none", linewidth=0))

    ax.set_aspect("equal")
    ax.set_xlim(0, scene.width)
    ax.set_ylim(scene.height, 0)
    ax.axis("off")


def save_scene_as_png(
    scene: Scene,
    filename: Optional[str] = None,
    resolution: int = 800,
) -> Optional[Image.Image]:
    """
    Render a square PNG preview of `resolution` pixels. Returns the PIL image
    when no filename is given.
    """
    fig = plt.figure(figsize=(4, 4), dpi=resolution / 4.0)
    ax = fig.add_axes((0, 0, 1, 1))
    draw_scene_on_axis(ax, scene)

    if filename is None:
        buffer = io.BytesIO()
        fig.savefig(buffer, format="png", facecolor="white")
        plt.close(fig)
        buffer.seek(0)
        return Image.open(buffer).convert("RGB")

    fig.savefig(filename, format="png", facecolor="white")
    plt.close(fig)
    return None


def render_to_file(
    scene: Scene,
    out_path: str,
    format: Optional[str] = None,
    resolution: int = 800,
) -> None:
    if format is None:
        format = "svg" if out_path.endswith(".svg") else "png"
    directory = os.path.dirname(out_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    if format == "svg":
        save_scene_as_svg(scene, out_path)
    elif format == "png":
        save_scene_as_png(scene, filename=out_path, resolution=resolution)
    else:
        raise ValueError(f"unsupported format: {format}")
