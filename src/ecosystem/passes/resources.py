"""Pass 4: mineral deposits and magical energy."""

import numpy as np

from ..config import GenerationOptions
from ..grid import Grid
from ..numeric import clamp_byte
from ..types import Mineral

# Draw order for random deposits
MINERAL_CHOICES: tuple[Mineral, ...] = (
    Mineral.IRON,
    Mineral.COAL,
    Mineral.GEMS,
    Mineral.GOLD,
)

MINERAL_ELEVATION = 160
MINERAL_CHANCE = 0.1
MAGIC_JITTER = 20


def generate_resources(
    grid: Grid, options: GenerationOptions, rng: np.random.Generator
) -> None:
    """Scatter minerals in high terrain and diffuse magical energy.

    Magical energy moves halfway toward the neighbourhood mean plus a
    jitter in [-20, 20]. Like elevation smoothing, the update is applied
    in place, so later cells see already-updated neighbours.
    """
    for x, y, cell in grid.each_cell():
        if cell.is_water:
            continue

        if cell.elevation > MINERAL_ELEVATION and rng.random() < MINERAL_CHANCE:
            cell.mineral_deposits.add(MINERAL_CHOICES[int(rng.integers(len(MINERAL_CHOICES)))])

        neighbors = grid.neighbor_cells(x, y)
        if neighbors:
            mean = sum(n.magical_energy for n in neighbors) / len(neighbors)
        else:
            mean = cell.magical_energy
        jitter = int(rng.integers(-MAGIC_JITTER, MAGIC_JITTER + 1))
        cell.magical_energy = clamp_byte((cell.magical_energy + mean) / 2 + jitter)
