"""Generation passes, applied in order by the pipeline.

Each pass takes ``(grid, options, rng)``, reads attributes written by the
passes before it and mutates the grid in place.
"""

from .biomes import generate_biomes
from .climate import generate_climate
from .features import place_features
from .foundation import generate_foundation
from .infrastructure import build_roads
from .resources import generate_resources
from .settlements import place_settlements

__all__ = [
    "build_roads",
    "generate_biomes",
    "generate_climate",
    "generate_foundation",
    "generate_resources",
    "place_features",
    "place_settlements",
]
