# Re-export core geometry and color API for convenience
from .geometry import (
    ShapeKind,
    SHAPE_KINDS,
    Affine2D,
    Boundary,
    unit_outline,
    make_boundary,
    polygon_from_points,
)
from .color import (
    Color,
    as_color,
    interpolate,
    interpolate_array,
)
