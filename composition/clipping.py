from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
import logging
import numpy as np
from shapely.geometry.base import BaseGeometry

from shapes.geometry import Boundary, polygon_from_points


logger = logging.getLogger(__name__)

GLOBAL_CLIP_ID = "clip-global-largest"


@dataclass(frozen=True)
class ClipBoundary:
    """
    Shrunken copy of a warped layer outline, used to confine other layers.
    """
    id: str
    source_index: int
    points: np.ndarray

    def to_shapely(self) -> BaseGeometry:
        return polygon_from_points(self.points)


@dataclass
class ClipResolution:
    global_clip: Optional[ClipBoundary] = None
    clips: Dict[str, ClipBoundary] = field(default_factory=dict)
    # layer index -> id of the clip that confines it (None for the outermost layer)
    assignments: Dict[int, Optional[str]] = field(default_factory=dict)

    def clip_for(self, index: int) -> Optional[ClipBoundary]:
        clip_id = self.assignments.get(index)
        if clip_id is None:
            return None
        return self.clips.get(clip_id)


def derive_clip(boundary: Boundary, clip_id: str, source_index: int, scale_factor: float = 0.90) -> ClipBoundary:
    return ClipBoundary(
        id=clip_id,
        source_index=source_index,
        points=boundary.scaled_about(scale_factor),
    )


def resolve_clips(
    layers: Sequence[Tuple[int, Optional[Boundary]]],
    scale_factor: float = 0.90,
) -> ClipResolution:
    """
    Derive clip boundaries from warped outlines, outermost layer first.

    Each layer except the outermost is confined by a clip built from its outer
    neighbour's warped outline, shrunk by `scale_factor` about that outline's
    centroid. The outermost outline, shrunk the same way, becomes the global
    clip around the whole stack. Layers whose neighbour is missing stay unclipped.
    """
    resolution = ClipResolution()
    if not layers:
        return resolution
    if any(b is not None and not b.warped for _, b in layers):
        logger.warning("resolving clips on unwarped geometry")

    outer_index, outer = layers[0]
    if outer is not None:
        resolution.global_clip = derive_clip(outer, GLOBAL_CLIP_ID, outer_index, scale_factor)
    resolution.assignments[outer_index] = None

    skipped: List[int] = []
    for (prev_index, prev), (index, _) in zip(layers[:-1], layers[1:]):
        if prev is None:
            skipped.append(index)
            resolution.assignments[index] = None
            continue
        clip_id = f"clip-{prev_index}"
        resolution.clips[clip_id] = derive_clip(prev, clip_id, prev_index, scale_factor)
        resolution.assignments[index] = clip_id
    if skipped:
        logger.warning("no outer neighbour for layers %s, left unclipped", skipped)
    logger.debug("derived %d layer clips", len(resolution.clips))
    return resolution
