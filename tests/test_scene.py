from __future__ import annotations

from dataclasses import replace

import numpy as np
import pytest

from composition import (
    ColorStops,
    GLOBAL_CLIP_ID,
    GradientParams,
    ParameterSet,
    RenderCaches,
    ShadowParams,
    TextureParams,
    WarpField,
    generate_scene,
)
from plotting.renderer import save_scene_as_png


def test_flat_circles_are_concentric(flat_params, rng):
    scene = generate_scene(flat_params, rng=rng)
    assert [layer.index for layer in scene.layers] == [5, 4, 3, 2]
    assert scene.warp_field.is_identity
    for layer in scene.layers:
        pts = layer.boundary.points
        r = np.hypot(pts[:, 0] - 400.0, pts[:, 1] - 400.0)
        assert np.allclose(r, layer.index * 20.0)


def test_clip_ids_follow_outer_neighbour(flat_params, rng):
    scene = generate_scene(flat_params, rng=rng)
    assert [layer.clip_id for layer in scene.layers] == [None, "clip-5", "clip-4", "clip-3"]
    assert set(scene.clips) == {"clip-5", "clip-4", "clip-3"}
    assert scene.global_clip.id == GLOBAL_CLIP_ID
    assert np.allclose(scene.global_clip.points, scene.layers[0].boundary.scaled_about(0.9))
    assert scene.layer(3).clip_id == "clip-4"
    with pytest.raises(KeyError):
        scene.layer(9)


def test_preview_pixels_match_exposed_regions():
    params = ParameterSet(
        shape_kind="square",
        layer_count=6,
        layer_scale=30.0,
        max_rotation=0,
        chaos_x=40,
        chaos_y=40,
        colors=ColorStops.from_hex("#000000", "#ffffff"),
    )
    field = WarpField(r1=40, r2=50, chaos_x=40, chaos_y=40)
    scene = generate_scene(params, warp_field=field)
    img = save_scene_as_png(scene, resolution=400)
    px_per_unit = 400 / scene.width

    checked = 0
    for k, layer in enumerate(scene.layers):
        exposed = scene.visible_region(layer)
        for inner in scene.layers[k + 1:]:
            exposed = exposed.difference(scene.visible_region(inner))
        # stay clear of antialiased edges
        core = exposed.buffer(-6.0)
        if core.is_empty:
            continue
        pt = core.representative_point()
        pixel = img.getpixel((int(pt.x * px_per_unit), int(pt.y * px_per_unit)))
        expected = layer.descriptor.fill.color.as_tuple()
        assert all(abs(a - b) <= 2 for a, b in zip(pixel, expected)), (layer.index, pixel, expected)
        checked += 1
    assert checked >= 2


def test_fixed_warp_field_is_reproducible():
    params = ParameterSet(layer_count=6, chaos_x=60, chaos_y=40, texture=TextureParams(enabled=True, intensity=40))
    field = WarpField(r1=33, r2=47, chaos_x=60, chaos_y=40)
    a = generate_scene(params, warp_field=field)
    b = generate_scene(params, warp_field=field)
    for la, lb in zip(a.layers, b.layers):
        assert np.array_equal(la.boundary.points, lb.boundary.points)
    assert a.tiles.keys() == b.tiles.keys()
    for key in a.tiles:
        assert np.array_equal(a.tiles[key].pixels, b.tiles[key].pixels)


def test_texture_scene_references_tiles(rng):
    params = ParameterSet(layer_count=5, texture=TextureParams(enabled=True, intensity=30))
    scene = generate_scene(params, rng=rng)
    assert [layer.pattern_id for layer in scene.layers] == [f"noise-pattern-{i}" for i in (5, 4, 3, 2)]
    assert all(scene.tiles[layer.pattern_id].size == 200 for layer in scene.layers)


def test_gradient_scene_uses_gradient_tiles(rng):
    params = ParameterSet(layer_count=3, gradient=GradientParams(enabled=True))
    scene = generate_scene(params, rng=rng)
    assert [layer.pattern_id for layer in scene.layers] == ["noise-gradient-3", "noise-gradient-2"]
    assert all(tile.kind == "gradient" and tile.size == 256 for tile in scene.tiles.values())


def test_solid_scene_has_no_tiles_or_filters(flat_params, rng):
    scene = generate_scene(flat_params, rng=rng)
    assert scene.tiles == {}
    assert scene.filters == {}
    assert all(layer.pattern_id is None and layer.filter_id is None for layer in scene.layers)


def test_caches_are_reset_per_generation(rng):
    params = ParameterSet(
        layer_count=5,
        colors=ColorStops.from_hex("#000000", "#ffffff"),
        texture=TextureParams(enabled=True),
    )
    caches = RenderCaches()
    generate_scene(params, rng=rng, caches=caches)
    assert len(caches.tiles) == 4
    generate_scene(params, rng=rng, caches=caches)
    assert len(caches.tiles) == 4
    assert caches.tiles.misses == 4
    assert caches.tiles.hits == 0


def test_shadowed_layers_reference_shared_filters(rng):
    params = ParameterSet(layer_count=8, shadow=ShadowParams(enabled=True, blur=4, size_multiplier=2))
    scene = generate_scene(params, rng=rng)
    ids = [layer.filter_id for layer in scene.layers]
    assert all(i is not None and i in scene.filters for i in ids)
    assert len(scene.filters) <= len(ids)


def test_minimum_layer_count(rng):
    scene = generate_scene(replace(ParameterSet(), layer_count=2), rng=rng)
    assert len(scene.layers) == 1
    assert scene.layers[0].clip_id is None
    assert scene.clips == {}
    assert scene.global_clip is not None
