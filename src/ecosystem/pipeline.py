"""Seven-pass ecosystem generation pipeline."""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

import numpy as np
import structlog

from .config import EcosystemConfig, GenerationOptions, validate_options
from .grid import Grid
from .passes import (
    build_roads,
    generate_biomes,
    generate_climate,
    generate_foundation,
    generate_resources,
    place_features,
    place_settlements,
)
from .passes.infrastructure import RoadSegment
from .passes.settlements import SettlementSite

logger = structlog.get_logger()

SEED_MODULUS = 2**128

PassFunction = Callable[[Grid, GenerationOptions, np.random.Generator], Any]

# Fixed pass order; each pass relies on attributes written by earlier ones
PASSES: tuple[tuple[str, PassFunction], ...] = (
    ("foundation", generate_foundation),
    ("climate", generate_climate),
    ("biomes", generate_biomes),
    ("resources", generate_resources),
    ("settlements", place_settlements),
    ("infrastructure", build_roads),
    ("features", place_features),
)


@dataclass
class GenerationResult:
    """Fully populated grid plus what is needed to reproduce it."""

    grid: Grid
    seed: int
    options: GenerationOptions
    settlements: list[SettlementSite] = field(default_factory=list)
    roads: list[RoadSegment] = field(default_factory=list)
    duration_ms: float = 0.0


def resolve_seed(seed: int | None) -> int:
    """Return the given seed, or draw a fresh one from OS entropy."""
    if seed is not None:
        return seed
    return int(np.random.SeedSequence().entropy)


def make_rng(seed: int) -> np.random.Generator:
    """Build the run's generator from any integer seed.

    numpy only accepts non-negative seeds, so negative seeds are folded
    into the 128-bit range.
    """
    return np.random.default_rng(seed % SEED_MODULUS)


class GenerationPipeline:
    """Runs the generation passes over a grid in their fixed order.

    A single random generator is shared by every pass, so the same
    (grid shape, options, seed) always yields the same grid.
    """

    def __init__(self, options: GenerationOptions, rng: np.random.Generator):
        """Initialize pipeline.

        Args:
            options: Validated generation options.
            rng: Random generator threaded through every pass.
        """
        self.options = options
        self.rng = rng
        self.generation = 0
        self.settlements: list[SettlementSite] = []
        self.roads: list[RoadSegment] = []

    def run(self, grid: Grid) -> Grid:
        """Execute all passes on the grid in place.

        Args:
            grid: Grid of default cells. The pipeline owns it until run
                returns.

        Returns:
            The same grid, fully populated.
        """
        for name, pass_fn in PASSES:
            start = time.perf_counter()
            outcome = pass_fn(grid, self.options, self.rng)
            self.generation += 1

            if name == "settlements":
                self.settlements = outcome
            elif name == "infrastructure":
                self.roads = outcome

            logger.debug(
                "pass_complete",
                pass_name=name,
                generation=self.generation,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
        return grid


def generate_ecosystem(
    width: int,
    height: int,
    options: GenerationOptions | Mapping[str, Any] | None = None,
    *,
    wrap: bool = True,
) -> GenerationResult:
    """Generate a complete ecosystem.

    Options and dimensions are validated before any cell is created, so a
    bad configuration never yields a partial grid.

    Args:
        width: Grid width in cells.
        height: Grid height in cells.
        options: Generation options (model or mapping); defaults if None.
        wrap: Whether the grid is toroidal.

    Returns:
        GenerationResult with the populated grid and the seed used.

    Raises:
        ConfigurationError: If options or dimensions are invalid.
    """
    options = validate_options(options)
    grid = Grid(width, height, wrap=wrap)
    seed = resolve_seed(options.seed)

    logger.info(
        "generation_started",
        width=width,
        height=height,
        wrap=wrap,
        seed=seed,
    )

    start = time.perf_counter()
    pipeline = GenerationPipeline(options, make_rng(seed))
    pipeline.run(grid)
    duration_ms = (time.perf_counter() - start) * 1000

    logger.info(
        "generation_complete",
        passes=pipeline.generation,
        settlements=len(pipeline.settlements),
        roads=len(pipeline.roads),
        duration_ms=round(duration_ms, 2),
    )

    return GenerationResult(
        grid=grid,
        seed=seed,
        options=options,
        settlements=pipeline.settlements,
        roads=pipeline.roads,
        duration_ms=duration_ms,
    )


def generate_from_config(config: EcosystemConfig) -> GenerationResult:
    """Generate an ecosystem from a loaded configuration."""
    return generate_ecosystem(
        config.width, config.height, config.generation, wrap=config.wrap
    )
