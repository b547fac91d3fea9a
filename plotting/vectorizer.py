from __future__ import annotations

from typing import List, Tuple
import numpy as np
import svgwrite

from composition.clipping import GLOBAL_CLIP_ID, ClipBoundary
from composition.layers import SolidFill
from composition.scene import Scene, SceneLayer
from composition.shadow import ShadowFilter


def _points(points: np.ndarray) -> List[Tuple[float, float]]:
    return [(round(float(x), 3), round(float(y), 3)) for x, y in points]


def _fill_value(layer: SceneLayer) -> str:
    fill = layer.descriptor.fill
    if layer.pattern_id is not None:
        return f"url(#{layer.pattern_id})"
    if isinstance(fill, SolidFill):
        return fill.color.to_hex()
    raise ValueError(f"layer {layer.index} has a {fill.mode} fill but no pattern tile")


def _add_patterns(dwg: svgwrite.Drawing, scene: Scene) -> None:
    for pattern_id, tile in scene.tiles.items():
        pattern = dwg.pattern(
            insert=(0, 0),
            size=(tile.size, tile.size),
            id=pattern_id,
            patternUnits="userSpaceOnUse",
            patternContentUnits="userSpaceOnUse",
        )
        pattern.add(
            dwg.image(
                href=tile.to_data_uri(),
                insert=(0, 0),
                size=(tile.size, tile.size),
                preserveAspectRatio="none",
            )
        )
        dwg.defs.add(pattern)


def _add_shadow_filter(dwg: svgwrite.Drawing, shadow: ShadowFilter) -> None:
    flt = dwg.filter(id=shadow.id, x="-50%", y="-50%", width="200%", height="200%")
    flt.feFlood(flood_color=shadow.color.to_hex(), flood_opacity=shadow.opacity, result="shadowColor")
    # Everything outside the shape, shifted and blurred, then cut back to the shape.
    flt.feComposite(in_="shadowColor", in2="SourceAlpha", operator="out", result="inverse")
    flt.feOffset(in_="inverse", dx=shadow.offset_x, dy=shadow.offset_y, result="offsetShadow")
    flt.feGaussianBlur(in_="offsetShadow", stdDeviation=shadow.blur, result="blurredShadow")
    flt.feComposite(in_="blurredShadow", in2="SourceAlpha", operator="in", result="innerShadow")
    flt.feMerge(["SourceGraphic", "innerShadow"])
    dwg.defs.add(flt)


def _add_clip(dwg: svgwrite.Drawing, clip: ClipBoundary) -> None:
    clip_path = dwg.clipPath(id=clip.id)
    clip_path.add(dwg.polygon(points=_points(clip.points)))
    dwg.defs.add(clip_path)


def scene_to_drawing(scene: Scene, filename: str = "paper-cut.svg") -> svgwrite.Drawing:
    """
    Self-contained SVG document for a scene.

    Layout: the outermost layer sits directly in the globally clipped group;
    every other layer gets its own group clipped by its outer neighbour.
    Raster tiles are embedded as PNG data URIs.
    """
    w, h = scene.width, scene.height
    dwg = svgwrite.Drawing(filename, size=(f"{w:g}px", f"{h:g}px"), viewBox=f"0 0 {w:g} {h:g}", debug=False)

    _add_patterns(dwg, scene)
    for shadow in scene.filters.values():
        _add_shadow_filter(dwg, shadow)
    if scene.global_clip is not None:
        _add_clip(dwg, scene.global_clip)
    for clip in scene.clips.values():
        _add_clip(dwg, clip)

    main = dwg.add(dwg.g())
    if scene.global_clip is not None:
        stack = main.add(dwg.g(clip_path=f"url(#{GLOBAL_CLIP_ID})"))
    else:
        stack = main
    for clip_id, layer in scene.groups():
        attrs = {"fill": _fill_value(layer), "stroke": "none"}
        if layer.filter_id is not None:
            attrs["filter"] = f"url(#{layer.filter_id})"
        shape = dwg.polygon(points=_points(layer.boundary.points), id=f"layer-{layer.index}", **attrs)
        if clip_id is None:
            stack.add(shape)
        else:
            group = stack.add(dwg.g(clip_path=f"url(#{clip_id})"))
            group.add(shape)
    return dwg


def scene_to_svg(scene: Scene) -> str:
    return scene_to_drawing(scene).tostring()


def save_scene_as_svg(scene: Scene, filename: str) -> None:
    scene_to_drawing(scene, filename).save()
