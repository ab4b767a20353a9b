"""Pass 1: elevation, standing water and water flow."""

import numpy as np

from ..config import GenerationOptions
from ..grid import Grid
from ..numeric import clamp_byte
from ..types import WaterFlow

# Raw elevation range for seeded cells, inclusive
SEED_ELEVATION_MIN = 100
SEED_ELEVATION_MAX = 255

# Water-neighbour count at which a stream becomes a river
RIVER_NEIGHBOR_COUNT = 4


def seed_elevation(grid: Grid, density: float, rng: np.random.Generator) -> int:
    """Raise a random subset of cells to a high starting elevation.

    Returns:
        Number of seeded cells.
    """
    seeded = 0
    for _, _, cell in grid.each_cell():
        if rng.random() < density:
            cell.elevation = int(rng.integers(SEED_ELEVATION_MIN, SEED_ELEVATION_MAX + 1))
            seeded += 1
    return seeded


def smooth_elevation(grid: Grid, iterations: int) -> None:
    """Blend each cell with its neighbourhood mean.

    Updates are written in place during the sweep, so cells later in
    row-major order already see their updated predecessors.
    """
    for _ in range(iterations):
        for x, y, cell in grid.each_cell():
            neighbors = grid.neighbor_cells(x, y)
            if not neighbors:
                continue
            mean = sum(n.elevation for n in neighbors) / len(neighbors)
            cell.elevation = clamp_byte((cell.elevation + mean) / 2)


def place_water_bodies(grid: Grid, threshold: int) -> int:
    """Flood every cell at or below the water threshold as a lake.

    A cell exactly at the threshold still receives a water level of 1.

    Returns:
        Number of flooded cells.
    """
    flooded = 0
    for _, _, cell in grid.each_cell():
        if cell.elevation <= threshold:
            cell.water_level = max(1, clamp_byte((threshold - cell.elevation) * 2))
            cell.water_flow = WaterFlow.LAKE
            flooded += 1
    return flooded


def classify_water_flow(grid: Grid) -> None:
    """Reclassify water cells by how many water neighbours they have.

    1-3 water neighbours make a stream, 4 or more a river; isolated water
    stays a lake.
    """
    for x, y, cell in grid.each_cell():
        if not cell.is_water:
            continue
        water_neighbors = sum(1 for n in grid.neighbor_cells(x, y) if n.is_water)
        if water_neighbors >= RIVER_NEIGHBOR_COUNT:
            cell.water_flow = WaterFlow.RIVER
        elif water_neighbors >= 1:
            cell.water_flow = WaterFlow.STREAM


def generate_foundation(
    grid: Grid, options: GenerationOptions, rng: np.random.Generator
) -> None:
    """Generate elevation and hydrology."""
    seed_elevation(grid, options.elevation_density, rng)
    smooth_elevation(grid, options.elevation_iterations)
    place_water_bodies(grid, options.water_threshold)
    classify_water_flow(grid)
