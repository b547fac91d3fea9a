"""
Seeded 2D simplex noise and its fractal (multi-octave) sum.

The permutation table is a pure function of the seed: entry k is drawn from
``frac(sin(seed + k) * 10000)``, so two instances built from the same seed
always agree and no generator state leaks between call sites.
"""
from __future__ import annotations

from typing import Union
import math
import numpy as np


ArrayLike = Union[float, np.ndarray]

_F2 = 0.5 * (math.sqrt(3.0) - 1.0)
_G2 = (3.0 - math.sqrt(3.0)) / 6.0

# Only the x/y components of the 12 edge gradients take part in the 2D dot product.
_GRAD3 = np.array(
    [
        [1, 1, 0], [-1, 1, 0], [1, -1, 0], [-1, -1, 0],
        [1, 0, 1], [-1, 0, 1], [1, 0, -1], [-1, 0, -1],
        [0, 1, 1], [0, -1, 1], [0, 1, -1], [0, -1, -1],
    ],
    dtype=float,
)

MAX_OCTAVES = 6


def seeded_unit(seed: float, index: int) -> float:
    """
    Deterministic pseudo-random value in [0, 1) for call `index` of a seed.
    """
    x = math.sin(seed + index) * 10000.0
    frac = x - math.floor(x)
    # Tiny negative x rounds up to exactly 1.0.
    return 0.0 if frac >= 1.0 else frac


def permutation_table(seed: float) -> np.ndarray:
    p = np.array([int(math.floor(seeded_unit(seed, i) * 256)) & 255 for i in range(256)], dtype=np.int64)
    return np.concatenate([p, p])


def clamp_octaves(octaves: int) -> int:
    return max(1, min(MAX_OCTAVES, int(octaves)))


class SimplexNoise:
    """
    2D simplex noise; `sample` accepts scalars or same-shaped arrays.
    """

    def __init__(self, seed: float = 0.0):
        self.seed = float(seed)
        self.perm = permutation_table(self.seed)

    def _corner(self, gi: np.ndarray, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        t = 0.5 - x * x - y * y
        dot = _GRAD3[gi, 0] * x + _GRAD3[gi, 1] * y
        t2 = t * t
        return np.where(t < 0.0, 0.0, t2 * t2 * dot)

    def sample(self, x: ArrayLike, y: ArrayLike) -> ArrayLike:
        """
        Noise value in approximately [-1, 1].
        """
        scalar = np.ndim(x) == 0 and np.ndim(y) == 0
        xin = np.asarray(x, dtype=float)
        yin = np.asarray(y, dtype=float)

        # Skew into the simplex grid and find the containing triangle.
        s = (xin + yin) * _F2
        i = np.floor(xin + s)
        j = np.floor(yin + s)
        t = (i + j) * _G2
        x0 = xin - (i - t)
        y0 = yin - (j - t)

        i1 = (x0 > y0).astype(np.int64)
        j1 = 1 - i1

        x1 = x0 - i1 + _G2
        y1 = y0 - j1 + _G2
        x2 = x0 - 1.0 + 2.0 * _G2
        y2 = y0 - 1.0 + 2.0 * _G2

        perm = self.perm
        ii = i.astype(np.int64) & 255
        jj = j.astype(np.int64) & 255
        gi0 = perm[ii + perm[jj]] % 12
        gi1 = perm[ii + i1 + perm[jj + j1]] % 12
        gi2 = perm[ii + 1 + perm[jj + 1]] % 12

        n = self._corner(gi0, x0, y0) + self._corner(gi1, x1, y1) + self._corner(gi2, x2, y2)
        value = 70.0 * n
        if scalar:
            return float(value)
        return value

    def fractal(self, x: ArrayLike, y: ArrayLike, octaves: int = 3) -> ArrayLike:
        """
        Octave sum at doubling frequency and halving amplitude, remapped to [0, 1].
        """
        scalar = np.ndim(x) == 0 and np.ndim(y) == 0
        xin = np.asarray(x, dtype=float)
        yin = np.asarray(y, dtype=float)
        total = np.zeros(np.broadcast(xin, yin).shape, dtype=float)
        amplitude = 1.0
        frequency = 1.0
        max_value = 0.0
        for _ in range(clamp_octaves(octaves)):
            total = total + self.sample(xin * frequency, yin * frequency) * amplitude
            max_value += amplitude
            amplitude *= 0.5
            frequency *= 2.0
        value = np.clip((total / max_value + 1.0) / 2.0, 0.0, 1.0)
        if scalar:
            return float(value)
        return value


def noise_sample(seed: float, x: ArrayLike, y: ArrayLike) -> ArrayLike:
    return SimplexNoise(seed).sample(x, y)


def fractal_noise(seed: float, x: ArrayLike, y: ArrayLike, octaves: int = 3) -> ArrayLike:
    return SimplexNoise(seed).fractal(x, y, octaves)
