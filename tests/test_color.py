from __future__ import annotations

import numpy as np
import pytest

from shapes.color import Color, as_color, interpolate, interpolate_array


def test_hex_round_trip_accepts_missing_hash_and_case():
    c = Color.from_hex("1D3557")
    assert c == Color(0x1D, 0x35, 0x57)
    assert c.to_hex() == "#1d3557"
    assert as_color("#1d3557") == c


def test_malformed_hex_is_rejected():
    with pytest.raises(ValueError):
        Color.from_hex("#12345")


def test_interpolate_endpoints():
    a = Color(10, 200, 30)
    b = Color(250, 0, 99)
    assert interpolate(a, b, 0.0) == a
    assert interpolate(a, b, 1.0) == b


@pytest.mark.parametrize("t", [0.0, 0.17, 0.5, 0.93, 1.0])
def test_interpolate_same_color_is_identity(t):
    a = Color(12, 34, 56)
    assert interpolate(a, a, t) == a


def test_interpolate_rounds_half_up():
    assert interpolate(Color(0, 0, 0), Color(255, 255, 255), 0.5) == Color(128, 128, 128)


def test_interpolate_clamps_t():
    a = Color(0, 0, 0)
    b = Color(100, 100, 100)
    assert interpolate(a, b, -3.0) == a
    assert interpolate(a, b, 7.0) == b


def test_interpolate_array_matches_scalar():
    a = Color(3, 100, 250)
    b = Color(200, 10, 0)
    ts = np.array([0.0, 0.1, 0.25, 0.5, 0.9, 1.0])
    arr = interpolate_array(a, b, ts)
    assert arr.dtype == np.uint8
    assert arr.shape == (6, 3)
    for t, row in zip(ts, arr):
        assert tuple(int(v) for v in row) == interpolate(a, b, float(t)).as_tuple()


def test_from_hsl_primaries():
    assert Color.from_hsl(0, 100, 50) == Color(255, 0, 0)
    assert Color.from_hsl(120, 100, 50) == Color(0, 255, 0)
    assert Color.from_hsl(240, 100, 50) == Color(0, 0, 255)
    assert Color.from_hsl(0, 0, 100) == Color(255, 255, 255)


def test_interpolation_identities_property():
    hypothesis = pytest.importorskip("hypothesis")
    st = pytest.importorskip("hypothesis.strategies")
    channels = st.tuples(*[st.integers(min_value=0, max_value=255)] * 3)

    @hypothesis.settings(max_examples=200, deadline=None)
    @hypothesis.given(a=channels, b=channels, t=st.floats(min_value=0.0, max_value=1.0))
    def check(a, b, t):
        ca, cb = Color(*a), Color(*b)
        assert interpolate(ca, ca, t) == ca
        out = interpolate(ca, cb, t)
        for lo, hi, v in zip(a, b, out.as_tuple()):
            assert min(lo, hi) <= v <= max(lo, hi)

    check()
