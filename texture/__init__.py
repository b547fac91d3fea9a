from .noise import (
    SimplexNoise,
    seeded_unit,
    permutation_table,
    noise_sample,
    fractal_noise,
    MAX_OCTAVES,
)
from .patterns import (
    Tile,
    TileCache,
    synthesize_texture_tile,
    synthesize_gradient_tile,
    tile_cache_key,
)
