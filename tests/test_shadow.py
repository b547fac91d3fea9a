from __future__ import annotations

from composition.layers import ShadowSpec
from composition.shadow import FilterCache, bucket_shadow
from shapes.color import Color


def _spec(blur, dx=1.0, dy=1.0):
    return ShadowSpec(multiplier=1.0, blur=blur, offset_x=dx, offset_y=dy, opacity=0.7, color=Color(0, 0, 0))


def test_similar_shadows_share_a_filter():
    a = bucket_shadow(_spec(4.1, 1.2, 0.9))
    b = bucket_shadow(_spec(3.9, 0.8, 1.1))
    assert a == b
    assert a.id == "shared-shadow-4-1-1-0.7-000000"
    assert bucket_shadow(_spec(6.0)).id != a.id


def test_filter_cache_reuses_and_evicts_fifo():
    cache = FilterCache(capacity=2)
    f1 = cache.filter_for(_spec(1.0))
    assert cache.filter_for(_spec(1.1)) is f1
    cache.filter_for(_spec(5.0))
    cache.filter_for(_spec(9.0))
    assert len(cache) == 2
    assert f1.id not in cache
    # recreated after eviction with identical parameters
    assert cache.filter_for(_spec(1.0)) == f1
