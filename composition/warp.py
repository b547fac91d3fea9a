from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple
import logging
import numpy as np

from shapes.geometry import Boundary
from .layers import map_range


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WarpField:
    """
    Sinusoidal "paper cut" displacement shared by every layer of a scene.

    Near the left/top edge the displacement amplitude is 1 (x) and 10 (y); it
    grows linearly to chaos_x / chaos_y at the right/bottom edge. Only a field
    with both chaos values at 0 leaves geometry untouched.
    """
    r1: int
    r2: int
    chaos_x: float
    chaos_y: float
    width: float = 800.0
    height: float = 800.0

    @staticmethod
    def draw(
        rng: np.random.Generator,
        chaos_x: float,
        chaos_y: float,
        width: float = 800.0,
        height: float = 800.0,
        radius_range: Tuple[int, int] = (24, 64),
    ) -> "WarpField":
        """
        Roll the two wave radii once; every layer is then warped by the same field.
        """
        lo, hi = radius_range
        r1 = int(rng.integers(lo, hi))
        r2 = int(rng.integers(lo, hi))
        logger.debug("warp radii r1=%d r2=%d", r1, r2)
        return WarpField(r1=r1, r2=r2, chaos_x=float(chaos_x), chaos_y=float(chaos_y), width=width, height=height)

    @property
    def is_identity(self) -> bool:
        return self.chaos_x == 0 and self.chaos_y == 0

    def displace(self, x: np.ndarray, y: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        x = np.asarray(x, dtype=float)
        y = np.asarray(y, dtype=float)
        if self.is_identity:
            return x.copy(), y.copy()
        half_w = self.width / 2.0
        half_h = self.height / 2.0
        factor_x = map_range(half_w - x, half_w, -half_w, 1.0, self.chaos_x)
        factor_y = map_range(half_h - y, half_h, -half_h, 10.0, self.chaos_y)
        return x - factor_x * np.sin(y / self.r1), y - factor_y * np.sin(x / self.r2)

    def apply(self, points: np.ndarray) -> np.ndarray:
        pts = np.asarray(points, dtype=float)
        new_x, new_y = self.displace(pts[:, 0], pts[:, 1])
        return np.stack([new_x, new_y], axis=1)


def apply_warp(boundaries: Sequence[Boundary], field: WarpField) -> List[Boundary]:
    """
    Displace every vertex of every boundary in place and hand the list back.

    Boundaries that were already warped are skipped: warping distorted
    geometry a second time would double the displacement.
    """
    out: List[Boundary] = []
    for boundary in boundaries:
        if boundary.warped:
            logger.warning("boundary %r already warped, skipping", boundary)
        else:
            boundary.points[:] = field.apply(boundary.points)
            boundary.warped = True
        out.append(boundary)
    return out
