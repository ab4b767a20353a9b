"""Layered procedural ecosystem generation over toroidal grids."""

from .cell import TerrainCell
from .config import EcosystemConfig, GenerationOptions, load_config, validate_options
from .exceptions import ConfigurationError, EcosystemError
from .grid import Grid
from .pipeline import (
    GenerationPipeline,
    GenerationResult,
    generate_ecosystem,
    generate_from_config,
)

__all__ = [
    "ConfigurationError",
    "EcosystemConfig",
    "EcosystemError",
    "GenerationOptions",
    "GenerationPipeline",
    "GenerationResult",
    "Grid",
    "TerrainCell",
    "generate_ecosystem",
    "generate_from_config",
    "load_config",
    "validate_options",
]
