from .params import (
    ColorStops,
    TextureParams,
    ShadowParams,
    GradientParams,
    ParameterSet,
)
from .config import (
    GeneratorConfig,
    ParameterLimits,
    Range,
    DEFAULT_CONFIG,
    DEFAULT_LIMITS,
    clamp_parameters,
)
from .layers import (
    LayerDescriptor,
    SolidFill,
    TextureFill,
    GradientFill,
    ShadowSpec,
    map_range,
    layer_rotation,
    layer_position,
    resolve_fill_mode,
    build_layers,
)
from .shadow import ShadowFilter, FilterCache
from .warp import WarpField, apply_warp
from .clipping import GLOBAL_CLIP_ID, ClipBoundary, ClipResolution, resolve_clips
from .scene import RenderCaches, Scene, SceneLayer, generate_scene
from .randomize import random_parameters, random_palette
