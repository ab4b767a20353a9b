"""Pass 5: settlement placement by suitability ranking."""

from dataclasses import dataclass

import numpy as np

from ..cell import TerrainCell
from ..config import GenerationOptions
from ..grid import Grid
from ..numeric import round_half_up
from ..types import ExplorationStatus, SettlementType

# (minimum exclusive score, tier, population density), checked top down
_TIERS: tuple[tuple[float, SettlementType, int], ...] = (
    (200, SettlementType.TOWN, 150),
    (150, SettlementType.VILLAGE, 100),
    (100, SettlementType.HAMLET, 60),
)
FALLBACK_TIER = SettlementType.FARMLAND
FALLBACK_POPULATION = 30

# Population of farmland laid out around a settlement
SURROUNDING_FARMLAND_POPULATION = 20


@dataclass
class SettlementSite:
    """A ranked settlement candidate."""

    x: int
    y: int
    score: float


def suitability_score(cell: TerrainCell, near_water: bool) -> float:
    """Score a cell for settlement.

    Fertility, water access and minerals raise the score; distance from
    mid elevation and danger lower it.
    """
    score = float(cell.soil_fertility)
    if near_water:
        score += 50
    score += 30 * len(cell.mineral_deposits)
    score -= abs(cell.elevation - 128) * 0.5
    score -= cell.danger_level
    return score


def settlement_tier(score: float) -> tuple[SettlementType, int]:
    """Map a suitability score to a tier and its population density."""
    for threshold, tier, population in _TIERS:
        if score > threshold:
            return tier, population
    return FALLBACK_TIER, FALLBACK_POPULATION


def rank_sites(grid: Grid) -> list[SettlementSite]:
    """All settlement-suitable cells, best first.

    The sort is stable, so equal scores keep row-major scan order.
    """
    sites = [
        SettlementSite(x, y, suitability_score(cell, grid.any_neighbor_water(x, y)))
        for x, y, cell in grid.each_cell()
        if cell.settlement_suitable
    ]
    sites.sort(key=lambda site: -site.score)
    return sites


def _surround_with_farmland(grid: Grid, x: int, y: int) -> None:
    for nx, ny in grid.neighbors(x, y):
        neighbor = grid.get(nx, ny)
        if neighbor.farmland_suitable and neighbor.settlement_type == SettlementType.NONE:
            neighbor.settlement_type = SettlementType.FARMLAND
            neighbor.population_density = SURROUNDING_FARMLAND_POPULATION
            neighbor.exploration_status = ExplorationStatus.SETTLED


def place_settlements(
    grid: Grid, options: GenerationOptions, rng: np.random.Generator
) -> list[SettlementSite]:
    """Settle the top-ranked fraction of suitable cells.

    Returns:
        Selected sites in placement order.
    """
    sites = rank_sites(grid)
    count = round_half_up(len(sites) * options.settlement_density)
    selected = sites[:count]

    for site in selected:
        cell = grid.get(site.x, site.y)
        cell.settlement_type, cell.population_density = settlement_tier(site.score)
        cell.exploration_status = ExplorationStatus.SETTLED
        if cell.settlement_type != SettlementType.FARMLAND:
            _surround_with_farmland(grid, site.x, site.y)

    return selected
