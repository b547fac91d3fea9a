from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple
import logging
import math
import numpy as np
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.base import BaseGeometry


logger = logging.getLogger(__name__)

ShapeKind = Literal["circle", "square", "triangle", "hexagon"]
SHAPE_KINDS: Tuple[str, ...] = ("circle", "square", "triangle", "hexagon")


@dataclass(frozen=True)
class Affine2D:
    """
    2D affine transform x -> A x + t, applied to (N, 2) point arrays.
    """
    A: np.ndarray  # shape (2, 2)
    t: np.ndarray  # shape (2,)

    def __post_init__(self):
        if self.A.shape != (2, 2):
            raise ValueError("A must be 2x2")
        if self.t.shape != (2,):
            raise ValueError("t must be length-2")

    def apply(self, points: np.ndarray) -> np.ndarray:
        pts = np.asarray(points, dtype=float)
        return pts @ self.A.T + self.t

    # ---- Constructors and composition ----
    @staticmethod
    def identity() -> "Affine2D":
        return Affine2D(A=np.eye(2), t=np.zeros(2))

    @staticmethod
    def from_translate(dx: float, dy: float) -> "Affine2D":
        return Affine2D(A=np.eye(2), t=np.array([dx, dy], dtype=float))

    @staticmethod
    def from_scale(sx: float, sy: float | None = None) -> "Affine2D":
        if sy is None:
            sy = sx
        return Affine2D(A=np.array([[sx, 0.0], [0.0, sy]], dtype=float), t=np.zeros(2))

    @staticmethod
    def from_rotation(theta_radians: float) -> "Affine2D":
        # Canvas coordinates grow downwards, so positive angles turn clockwise on screen.
        c = math.cos(theta_radians)
        s = math.sin(theta_radians)
        return Affine2D(A=np.array([[c, -s], [s, c]], dtype=float), t=np.zeros(2))

    @staticmethod
    def about(center: Tuple[float, float], inner: "Affine2D") -> "Affine2D":
        """
        Conjugate `inner` so that it acts around `center` instead of the origin.
        """
        cx, cy = center
        return Affine2D.from_translate(-cx, -cy).then(inner).then(Affine2D.from_translate(cx, cy))

    def then(self, after: "Affine2D") -> "Affine2D":
        """
        First apply self, then apply 'after'.
        y = after.apply(self.apply(x))
        """
        A_new = after.A @ self.A
        t_new = after.A @ self.t + after.t
        return Affine2D(A=A_new, t=t_new)


def _unit_circle(num_points: int) -> np.ndarray:
    angles = np.arange(num_points, dtype=float) / num_points * 2.0 * math.pi
    return np.stack([np.cos(angles), np.sin(angles)], axis=1)


# Outlines below span x in [-1, 1] and are centered on their bounding box.
_UNIT_SQUARE = np.array([[-1.0, -1.0], [1.0, -1.0], [1.0, 1.0], [-1.0, 1.0]])

_HEX_H = 150.0 / 129.904
_UNIT_HEXAGON = np.array(
    [
        [0.0, -_HEX_H],
        [1.0, -_HEX_H / 2.0],
        [1.0, _HEX_H / 2.0],
        [0.0, _HEX_H],
        [-1.0, _HEX_H / 2.0],
        [-1.0, -_HEX_H / 2.0],
    ]
)

_TRI_H = 252.5 / 250.0
_UNIT_TRIANGLE = np.array([[0.0, -_TRI_H], [1.0, _TRI_H], [-1.0, _TRI_H]])


def unit_outline(kind: str, circle_points: int = 48) -> np.ndarray:
    """
    Polygon approximation of a shape kind with half-width 1, centered at the origin.
    Unknown kinds fall back to a circle.
    """
    if kind == "circle":
        return _unit_circle(max(3, int(circle_points)))
    if kind == "square":
        return _UNIT_SQUARE.copy()
    if kind == "hexagon":
        return _UNIT_HEXAGON.copy()
    if kind == "triangle":
        return _UNIT_TRIANGLE.copy()
    logger.warning("unknown shape kind %r, falling back to circle", kind)
    return _unit_circle(max(3, int(circle_points)))


class Boundary:
    """
    Closed polygon stored as an ordered (N, 2) point array.

    The point array is mutated in place by the warp step; `warped` records
    whether that already happened so the distortion is never applied twice.
    """

    def __init__(self, points: np.ndarray, kind: str = "polygon"):
        pts = np.array(points, dtype=float)
        if pts.ndim != 2 or pts.shape[1] != 2 or pts.shape[0] < 3:
            raise ValueError("Boundary requires an array of N>=3 points of shape (N,2)")
        self.points = pts
        self.kind = kind
        self.warped = False

    def __len__(self) -> int:
        return int(self.points.shape[0])

    def __repr__(self) -> str:
        return f"Boundary(kind={self.kind!r}, points={len(self)}, warped={self.warped})"

    def copy(self) -> "Boundary":
        b = Boundary(self.points.copy(), kind=self.kind)
        b.warped = self.warped
        return b

    def signed_area(self) -> float:
        x = self.points[:, 0]
        y = self.points[:, 1]
        return 0.5 * float(np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))

    def centroid(self) -> Tuple[float, float]:
        """
        Area centroid (shoelace). Degenerate polygons use the vertex mean.
        """
        area = self.signed_area()
        if abs(area) < 1e-9:
            cx, cy = self.points.mean(axis=0)
            return float(cx), float(cy)
        x = self.points[:, 0]
        y = self.points[:, 1]
        xn = np.roll(x, -1)
        yn = np.roll(y, -1)
        cross = x * yn - xn * y
        cx = float(np.sum((x + xn) * cross)) / (6.0 * area)
        cy = float(np.sum((y + yn) * cross)) / (6.0 * area)
        return cx, cy

    def bounds(self) -> Tuple[float, float, float, float]:
        xmin, ymin = self.points.min(axis=0)
        xmax, ymax = self.points.max(axis=0)
        return float(xmin), float(ymin), float(xmax), float(ymax)

    def scaled_about(self, factor: float, origin: Optional[Tuple[float, float]] = None) -> np.ndarray:
        """
        New point array scaled by `factor` about `origin` (default: centroid).
        The boundary itself is left untouched.
        """
        if origin is None:
            origin = self.centroid()
        T = Affine2D.about(origin, Affine2D.from_scale(factor))
        return T.apply(self.points)

    def to_shapely(self) -> BaseGeometry:
        return polygon_from_points(self.points)


def polygon_from_points(points: np.ndarray) -> BaseGeometry:
    """
    Shapely polygon for a point ring; self-intersecting rings are repaired.
    """
    geom = ShapelyPolygon([tuple(p) for p in np.asarray(points, dtype=float)])
    if not geom.is_valid:
        geom = geom.buffer(0)
    return geom


def make_boundary(
    kind: str,
    size: float,
    center: Tuple[float, float],
    rotation_degrees: float = 0.0,
    circle_points: int = 48,
) -> Boundary:
    """
    Nominal (pre-warp) boundary of one layer.

    `size` is the half-width of the shape: the radius of a circle, half the side
    of a square, half the bounding width of a hexagon or triangle.
    """
    outline = unit_outline(kind, circle_points)
    T = (
        Affine2D.from_scale(size)
        .then(Affine2D.from_rotation(math.radians(rotation_degrees)))
        .then(Affine2D.from_translate(center[0], center[1]))
    )
    resolved = kind if kind in SHAPE_KINDS else "circle"
    return Boundary(T.apply(outline), kind=resolved)
