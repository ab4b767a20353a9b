"""Pass 3: biomes, vegetation and soil fertility."""

import numpy as np

from ..cell import TerrainCell
from ..config import GenerationOptions
from ..grid import Grid
from ..numeric import clamp_byte
from ..types import BiomeType, ClimateZone, VegetationType

# Biome -> base vegetation density
_VEGETATION_BASE: dict[BiomeType, int] = {
    BiomeType.FOREST: 180,
    BiomeType.GRASSLAND: 100,
    BiomeType.DESERT: 20,
    BiomeType.TUNDRA: 40,
    BiomeType.MOUNTAIN: 60,
}

# Biome -> base soil fertility
_FERTILITY_BASE: dict[BiomeType, int] = {
    BiomeType.GRASSLAND: 150,
    BiomeType.FOREST: 120,
    BiomeType.DESERT: 30,
    BiomeType.TUNDRA: 50,
    BiomeType.MOUNTAIN: 70,
}

# Forest vegetation depends on climate; other biomes have a fixed type
_FOREST_VEGETATION: dict[ClimateZone, VegetationType] = {
    ClimateZone.TROPICAL: VegetationType.TROPICAL,
    ClimateZone.TEMPERATE: VegetationType.DECIDUOUS,
    ClimateZone.ARCTIC: VegetationType.CONIFEROUS,
    ClimateZone.DESERT: VegetationType.DECIDUOUS,
}

_BIOME_VEGETATION: dict[BiomeType, VegetationType] = {
    BiomeType.GRASSLAND: VegetationType.GRASS,
    BiomeType.DESERT: VegetationType.NONE,
    BiomeType.TUNDRA: VegetationType.SHRUBS,
    BiomeType.MOUNTAIN: VegetationType.CONIFEROUS,
}

WATER_FERTILITY_BONUS = 40
MODERATE_ELEVATION_FERTILITY_BONUS = 20


def determine_biome(cell: TerrainCell) -> BiomeType:
    """Pick a biome from climate zone and elevation."""
    if cell.is_water:
        return BiomeType.OCEAN

    zone = cell.climate_zone
    if zone == ClimateZone.ARCTIC:
        return BiomeType.TUNDRA
    if zone == ClimateZone.DESERT:
        return BiomeType.DESERT
    if zone == ClimateZone.TROPICAL:
        if cell.elevation > 180:
            return BiomeType.MOUNTAIN
        if cell.rainfall > 120:
            return BiomeType.FOREST
        return BiomeType.GRASSLAND

    if cell.elevation > 200:
        return BiomeType.MOUNTAIN
    if cell.rainfall > 140:
        return BiomeType.FOREST
    return BiomeType.GRASSLAND


def vegetation_density(cell: TerrainCell) -> int:
    """Biome base density shifted by rainfall and (above 80) temperature."""
    density = float(_VEGETATION_BASE.get(cell.biome_type, 50))
    density += (cell.rainfall - 128) * 0.3
    if cell.temperature > 80:
        density += (cell.temperature - 128) * 0.2
    return clamp_byte(density)


def vegetation_type(cell: TerrainCell) -> VegetationType:
    if cell.biome_type == BiomeType.FOREST:
        return _FOREST_VEGETATION[cell.climate_zone]
    return _BIOME_VEGETATION.get(cell.biome_type, VegetationType.GRASS)


def soil_fertility(cell: TerrainCell, near_water: bool) -> int:
    """Biome base fertility, boosted by water and moderate elevation."""
    fertility = _FERTILITY_BASE.get(cell.biome_type, 100)
    if near_water:
        fertility += WATER_FERTILITY_BONUS
    if 100 < cell.elevation < 160:
        fertility += MODERATE_ELEVATION_FERTILITY_BONUS
    return clamp_byte(fertility)


def generate_biomes(
    grid: Grid, options: GenerationOptions, rng: np.random.Generator
) -> None:
    """Assign biome, vegetation and soil to every land cell.

    Water cells become ocean with no vegetation (type none, density 0);
    their soil is left untouched.
    """
    for x, y, cell in grid.each_cell():
        if cell.is_water:
            cell.biome_type = BiomeType.OCEAN
            cell.vegetation_type = VegetationType.NONE
            cell.vegetation_density = 0
            continue

        cell.biome_type = determine_biome(cell)
        cell.vegetation_density = vegetation_density(cell)
        cell.vegetation_type = vegetation_type(cell)
        cell.soil_fertility = soil_fertility(cell, grid.any_neighbor_water(x, y))
