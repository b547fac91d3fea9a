from __future__ import annotations

import argparse
import os

import numpy as np

from common.logging import setup_default_logging
from composition import (
    ColorStops,
    GradientParams,
    ParameterSet,
    ShadowParams,
    TextureParams,
    clamp_parameters,
    generate_scene,
    random_parameters,
)
from plotting.renderer import render_to_file
from shapes import Color


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate layered paper-cut forms and export them as SVG/PNG.")
    p.add_argument("--shape", type=str, default="circle", choices=["circle", "square", "triangle", "hexagon"])
    p.add_argument("--layers", type=int, default=10, help="number of layers (generates layers N down to 2)")
    p.add_argument("--scale", type=float, default=20.0, help="half-width step between layers")
    p.add_argument("--rotate", type=float, default=15.0, help="maximum rotation in degrees")
    p.add_argument("--chaos-x", type=float, default=30.0, help="warp intensity on the x axis")
    p.add_argument("--chaos-y", type=float, default=30.0, help="warp intensity on the y axis")
    p.add_argument("--colors", type=str, nargs="+", default=["#1d3557", "#f1faee"],
                   help="edge and center colors; pass four for two-pair mode (1A 2A 1B 2B)")
    p.add_argument("--texture", action="store_true", help="fill layers with a noise texture")
    p.add_argument("--texture-intensity", type=float, default=40.0)
    p.add_argument("--texture-scale", type=float, default=50.0)
    p.add_argument("--texture-octaves", type=int, default=3)
    p.add_argument("--gradient", action="store_true", help="fill layers with a noise-distorted gradient")
    p.add_argument("--gradient-intensity", type=float, default=50.0)
    p.add_argument("--gradient-scale", type=float, default=80.0)
    p.add_argument("--gradient-octaves", type=int, default=4)
    p.add_argument("--shadow", action="store_true", help="add a progressive inner shadow")
    p.add_argument("--shadow-offset", type=float, nargs=2, default=[1.0, 1.0])
    p.add_argument("--shadow-blur", type=float, default=4.0)
    p.add_argument("--shadow-size", type=float, default=2.0)
    p.add_argument("--shadow-color", type=str, default="#000000")
    p.add_argument("--random", type=int, default=0, help="generate this many random compositions instead")
    p.add_argument("--seed", type=int, default=42, help="random seed (warp radii and --random)")
    p.add_argument("--outdir", type=str, default="plots/paper_cut", help="output directory")
    p.add_argument("--format", type=str, default="svg", choices=["svg", "png", "both"])
    p.add_argument("--resolution", type=int, default=800, help="PNG preview size in pixels")
    p.add_argument("--log-level", type=str, default="INFO")
    return p.parse_args()


def params_from_args(args: argparse.Namespace) -> ParameterSet:
    if len(args.colors) >= 4:
        colors = ColorStops.from_hex(args.colors[0], args.colors[1], args.colors[2], args.colors[3])
    elif len(args.colors) >= 2:
        colors = ColorStops.from_hex(args.colors[0], args.colors[1])
    else:
        raise ValueError("at least two colors are required")
    params = ParameterSet(
        shape_kind=args.shape,
        layer_count=args.layers,
        layer_scale=args.scale,
        max_rotation=args.rotate,
        chaos_x=args.chaos_x,
        chaos_y=args.chaos_y,
        colors=colors,
        texture=TextureParams(
            enabled=args.texture and not args.gradient,
            intensity=args.texture_intensity,
            scale=args.texture_scale,
            octaves=args.texture_octaves,
        ),
        shadow=ShadowParams(
            enabled=args.shadow,
            offset_x=args.shadow_offset[0],
            offset_y=args.shadow_offset[1],
            blur=args.shadow_blur,
            size_multiplier=args.shadow_size,
            color=Color.from_hex(args.shadow_color),
        ),
        gradient=GradientParams(
            enabled=args.gradient,
            intensity=args.gradient_intensity,
            scale=args.gradient_scale,
            octaves=args.gradient_octaves,
        ),
    )
    return clamp_parameters(params)


def export(scene, outdir: str, name: str, fmt: str, resolution: int) -> None:
    formats = ["svg", "png"] if fmt == "both" else [fmt]
    for f in formats:
        out_path = os.path.join(outdir, f"{name}.{f}")
        render_to_file(scene, out_path, format=f, resolution=resolution)
        print(f"Saved: {out_path}")


def main() -> None:
    args = parse_args()
    setup_default_logging(args.log_level)
    os.makedirs(args.outdir, exist_ok=True)
    rng = np.random.default_rng(args.seed)

    if args.random > 0:
        for i in range(args.random):
            params = random_parameters(rng, gradient=bool(rng.random() < 0.5))
            print(f"[{i+1}/{args.random}] {params.shape_kind} x{params.layer_count} "
                  f"(scale={params.layer_scale}, chaos={params.chaos_x}/{params.chaos_y})")
            scene = generate_scene(params, rng=rng)
            export(scene, args.outdir, f"random_{i:03d}", args.format, args.resolution)
        return

    scene = generate_scene(params_from_args(args), rng=rng)
    export(scene, args.outdir, f"paper_cut_{args.shape}", args.format, args.resolution)


if __name__ == "__main__":
    main()
