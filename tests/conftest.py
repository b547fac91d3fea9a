"""Shared fixtures: fixed seeds, headless matplotlib and small parameter sets."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from composition import ColorStops, ParameterSet, WarpField


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    np.random.seed(12345)


@pytest.fixture()
def rng() -> np.random.Generator:
    return np.random.default_rng(7)


@pytest.fixture()
def flat_params() -> ParameterSet:
    """Five concentric circles, no warp, no rotation."""
    return ParameterSet(
        shape_kind="circle",
        layer_count=5,
        layer_scale=20.0,
        max_rotation=0.0,
        chaos_x=0.0,
        chaos_y=0.0,
        colors=ColorStops.from_hex("#ff0000", "#0000ff"),
    )


@pytest.fixture()
def warp_field() -> WarpField:
    return WarpField(r1=30, r2=40, chaos_x=50.0, chaos_y=50.0)
