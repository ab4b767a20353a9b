"""Pass 7: dungeons, ruins and shrines."""

import numpy as np

from ..config import GenerationOptions
from ..grid import Grid
from ..numeric import clamp_byte
from ..types import BiomeType, SettlementType, SpecialFeature

DUNGEON_CHANCE = 0.7
SHRINE_CHANCE = 0.5
DUNGEON_DANGER = 50
MAGIC_SHRINE_DANGER = 30


def place_features(
    grid: Grid, options: GenerationOptions, rng: np.random.Generator
) -> int:
    """Scatter special features over wild land.

    One draw is taken per cell before any other check, so the random
    stream does not depend on terrain.

    Returns:
        Number of features placed.
    """
    placed = 0
    for _, _, cell in grid.each_cell():
        if rng.random() >= options.feature_density:
            continue
        if cell.is_water or cell.settlement_type != SettlementType.NONE:
            continue

        if cell.elevation > 180:
            if rng.random() < DUNGEON_CHANCE:
                cell.special_features.add(SpecialFeature.DUNGEON)
                cell.danger_level = clamp_byte(cell.danger_level + DUNGEON_DANGER)
            else:
                cell.special_features.add(SpecialFeature.RUINS)
        elif cell.biome_type == BiomeType.FOREST and cell.vegetation_density > 150:
            if rng.random() < SHRINE_CHANCE:
                cell.special_features.add(SpecialFeature.SHRINE)
            else:
                cell.special_features.add(SpecialFeature.RUINS)
        elif cell.magical_energy > 180:
            cell.special_features.add(SpecialFeature.SHRINE)
            cell.danger_level = clamp_byte(cell.danger_level + MAGIC_SHRINE_DANGER)
        else:
            continue
        placed += 1
    return placed
