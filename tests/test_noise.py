from __future__ import annotations

import numpy as np
import pytest

from texture.noise import (
    MAX_OCTAVES,
    SimplexNoise,
    clamp_octaves,
    fractal_noise,
    noise_sample,
    permutation_table,
    seeded_unit,
)


def test_seeded_unit_is_pure_and_in_unit_interval():
    values = [seeded_unit(3.5, k) for k in range(200)]
    assert values == [seeded_unit(3.5, k) for k in range(200)]
    assert all(0.0 <= v < 1.0 for v in values)


def test_permutation_table_is_doubled_bytes():
    p = permutation_table(42.0)
    assert p.shape == (512,)
    assert p.min() >= 0 and p.max() <= 255
    assert np.array_equal(p[:256], p[256:])


@pytest.mark.parametrize("seed", [-1e-30, -5.9e-108, 0.0, 42.0])
def test_permutation_entries_stay_bytes_for_tiny_negative_seeds(seed):
    assert all(0.0 <= seeded_unit(seed, k) < 1.0 for k in range(256))
    p = permutation_table(seed)
    assert 0 <= p.min() and p.max() <= 255


def test_tiny_negative_seed_samples_without_error():
    v = fractal_noise(-1e-30, 0.0, -0.5, 1)
    assert 0.0 <= v <= 1.0
    xs, ys = np.meshgrid(np.linspace(-3, 3, 41), np.linspace(-3, 3, 41))
    out = SimplexNoise(-5.9e-108).sample(xs, ys)
    assert np.all(np.isfinite(out))


def test_same_seed_same_field():
    xs, ys = np.meshgrid(np.linspace(-20, 20, 31), np.linspace(0, 50, 17))
    a = SimplexNoise(11.0).sample(xs, ys)
    b = SimplexNoise(11.0).sample(xs, ys)
    assert np.array_equal(a, b)
    assert noise_sample(11.0, 1.25, -3.5) == SimplexNoise(11.0).sample(1.25, -3.5)


def test_different_seeds_differ():
    xs, ys = np.meshgrid(np.linspace(0, 10, 25), np.linspace(0, 10, 25))
    assert not np.allclose(SimplexNoise(1.0).sample(xs, ys), SimplexNoise(2.0).sample(xs, ys))


def test_scalar_in_scalar_out():
    v = SimplexNoise(0.0).sample(0.3, 0.7)
    assert isinstance(v, float)
    f = fractal_noise(0.0, 0.3, 0.7, 3)
    assert isinstance(f, float)


def test_sample_is_bounded():
    rng = np.random.default_rng(0)
    pts = rng.uniform(-500, 500, size=(5000, 2))
    v = SimplexNoise(7.0).sample(pts[:, 0], pts[:, 1])
    assert np.all(np.abs(v) <= 1.05)


def test_sample_is_zero_on_lattice_origin():
    assert SimplexNoise(5.0).sample(0.0, 0.0) == pytest.approx(0.0)


def test_octaves_are_clamped():
    assert clamp_octaves(0) == 1
    assert clamp_octaves(99) == MAX_OCTAVES
    xs = np.linspace(0, 5, 40)
    n = SimplexNoise(9.0)
    assert np.array_equal(n.fractal(xs, xs, 99), n.fractal(xs, xs, MAX_OCTAVES))


def test_fractal_in_unit_interval_property():
    hypothesis = pytest.importorskip("hypothesis")
    st = pytest.importorskip("hypothesis.strategies")

    @hypothesis.settings(max_examples=200, deadline=None)
    @hypothesis.given(
        seed=st.floats(min_value=-1e4, max_value=1e4, allow_nan=False),
        x=st.floats(min_value=-1e4, max_value=1e4, allow_nan=False),
        y=st.floats(min_value=-1e4, max_value=1e4, allow_nan=False),
        octaves=st.integers(min_value=1, max_value=MAX_OCTAVES),
    )
    def check(seed, x, y, octaves):
        v = fractal_noise(seed, x, y, octaves)
        assert 0.0 <= v <= 1.0

    check()
