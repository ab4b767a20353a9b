"""Pass 2: temperature, rainfall and climate zones.

A heuristic model: temperature falls with elevation and is moderated by
water; rainfall rises near water and on mid slopes and drops in the rain
shadow of high peaks.
"""

import numpy as np

from ..config import GenerationOptions
from ..grid import Grid
from ..numeric import clamp_byte, round_half_up
from ..types import ClimateZone

BASE_TEMPERATURE = 200
WATER_TEMPERATURE_BONUS = 20

BASE_RAINFALL = 100
WATER_RAINFALL_BONUS = 50
SLOPE_RAINFALL_BONUS = 30
RAIN_SHADOW_PENALTY = 40


def determine_climate_zone(temperature: int, rainfall: int) -> ClimateZone:
    """Classify a climate zone, checked in priority order."""
    if temperature < 80:
        return ClimateZone.ARCTIC
    if temperature > 180 and rainfall < 80:
        return ClimateZone.DESERT
    if temperature > 160:
        return ClimateZone.TROPICAL
    return ClimateZone.TEMPERATE


def generate_climate(
    grid: Grid, options: GenerationOptions, rng: np.random.Generator
) -> None:
    """Derive temperature, rainfall and climate zone for every cell."""
    for x, y, cell in grid.each_cell():
        near_water = grid.any_neighbor_water(x, y)

        temperature = BASE_TEMPERATURE - round_half_up(cell.elevation * 0.5)
        if cell.is_water or near_water:
            temperature += WATER_TEMPERATURE_BONUS
        cell.temperature = clamp_byte(temperature)

        rainfall = BASE_RAINFALL
        if near_water:
            rainfall += WATER_RAINFALL_BONUS
        if 120 < cell.elevation < 180:
            rainfall += SLOPE_RAINFALL_BONUS
        if cell.elevation > 200:
            rainfall -= RAIN_SHADOW_PENALTY
        cell.rainfall = clamp_byte(rainfall)

        cell.climate_zone = determine_climate_zone(cell.temperature, cell.rainfall)
