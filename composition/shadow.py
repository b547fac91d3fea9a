from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
import logging

from shapes.color import Color
from .layers import ShadowSpec


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShadowFilter:
    """
    Inner shadow filter chain:
    flood -> out(SourceAlpha) -> offset -> blur -> in(SourceAlpha) -> merge over SourceGraphic.
    """
    id: str
    blur: float
    offset_x: float
    offset_y: float
    opacity: float
    color: Color


def _fmt(v: float) -> str:
    return f"{v:g}"


def bucket_shadow(spec: ShadowSpec) -> ShadowFilter:
    """
    Round a layer's shadow so similar layers share one filter definition:
    blur to 0.5, offsets to 1, opacity to 0.1.
    """
    blur = round(spec.blur * 2) / 2
    dx = float(round(spec.offset_x))
    dy = float(round(spec.offset_y))
    opacity = round(spec.opacity * 10) / 10
    filter_id = "shared-shadow-{}-{}-{}-{}-{}".format(
        _fmt(blur), _fmt(dx), _fmt(dy), _fmt(opacity), spec.color.to_hex().lstrip("#")
    )
    return ShadowFilter(id=filter_id, blur=blur, offset_x=dx, offset_y=dy, opacity=opacity, color=spec.color)


class FilterCache:
    """
    Bounded FIFO of shadow filters keyed by their bucketed id.
    """

    def __init__(self, capacity: int = 10):
        self.capacity = max(1, int(capacity))
        self._items: "OrderedDict[str, ShadowFilter]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, filter_id: str) -> bool:
        return filter_id in self._items

    def filter_for(self, spec: ShadowSpec) -> ShadowFilter:
        candidate = bucket_shadow(spec)
        cached = self._items.get(candidate.id)
        if cached is not None:
            return cached
        if len(self._items) >= self.capacity:
            self._items.popitem(last=False)
        self._items[candidate.id] = candidate
        logger.debug("new shadow filter %s", candidate.id)
        return candidate

    def clear(self) -> None:
        self._items.clear()
