"""Post-generation validation and statistics."""

from collections import Counter

import numpy as np
import structlog
from scipy import ndimage

from .cell import NUMERIC_ATTRIBUTES
from .grid import Grid
from .passes.infrastructure import RoadSegment
from .types import BiomeType, Infrastructure, SettlementType

logger = structlog.get_logger()

# 8-connected structuring element for component labelling
_MOORE_STRUCTURE = np.ones((3, 3), dtype=bool)


class ValidationResult:
    """Outcome of checking a generated grid.

    Errors are broken invariants (out-of-range attributes, settled water,
    orphan roads) and fail validation; warnings such as disconnected road
    networks are expected outcomes of generation and do not.
    """

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Record a broken invariant and fail validation."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Record a notable but valid property of the grid."""
        self.warnings.append(message)


def validate_ecosystem(
    grid: Grid, roads: list[RoadSegment] | None = None
) -> ValidationResult:
    """Validate a generated grid against its invariants.

    Args:
        grid: Generated grid.
        roads: Road segments from the infrastructure pass. When given,
            every road cell must lie on one of them.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()

    _check_ranges(grid, result)
    _check_water_consistency(grid, result)
    _check_settlement_on_land(grid, result)
    if roads is not None:
        _check_roads_on_segments(grid, roads, result)
    _check_road_networks(grid, result)

    if result.passed:
        logger.info("validation_passed", warnings=len(result.warnings))
    else:
        logger.warning("validation_failed", errors=result.errors)
    for warning in result.warnings:
        logger.warning("validation_warning", detail=warning)

    return result


def _check_ranges(grid: Grid, result: ValidationResult) -> None:
    """Check all numeric attributes are in [0, 255]."""
    for x, y, cell in grid.each_cell():
        for name in NUMERIC_ATTRIBUTES:
            value = getattr(cell, name)
            if not 0 <= value <= 255:
                result.add_error(f"{name}={value} out of range at ({x}, {y})")


def _check_water_consistency(grid: Grid, result: ValidationResult) -> None:
    """Check biome agrees with the water flag."""
    for x, y, cell in grid.each_cell():
        if cell.is_water != (cell.biome_type == BiomeType.OCEAN):
            result.add_error(f"Biome {cell.biome_type.value} disagrees with water at ({x}, {y})")
        if cell.settlement_type != SettlementType.NONE and cell.is_water:
            result.add_error(f"Settlement on water at ({x}, {y})")


def _check_settlement_on_land(grid: Grid, result: ValidationResult) -> None:
    for x, y, cell in grid.each_cell():
        if cell.settlement_suitable and not cell.is_land:
            result.add_error(f"Settlement-suitable water cell at ({x}, {y})")


def _check_roads_on_segments(
    grid: Grid, roads: list[RoadSegment], result: ValidationResult
) -> None:
    """Check no road cell lies off every drawn segment."""
    on_path = {grid.normalize(x, y) for segment in roads for x, y in segment.path}
    orphans = [
        (x, y) for x, y, cell in grid.each_cell()
        if Infrastructure.ROAD in cell.infrastructure and (x, y) not in on_path
    ]
    if orphans:
        result.add_error(f"{len(orphans)} road cells lie on no segment, first at {orphans[0]}")


def _check_road_networks(grid: Grid, result: ValidationResult) -> None:
    """Warn when settlements fall into several disconnected road networks."""
    networks = count_road_networks(grid)
    if networks > 1:
        result.add_warning(f"Roads form {networks} disconnected networks")


def count_road_networks(grid: Grid) -> int:
    """Count 8-connected components of roads and settlements.

    Settlement cells are not marked as road themselves, so they are
    included to join the roads that meet at them.
    """
    network = grid.mask(
        lambda cell: Infrastructure.ROAD in cell.infrastructure
        or cell.settlement_type.is_settlement
    )
    if not network.any():
        return 0
    _, num_features = ndimage.label(network, structure=_MOORE_STRUCTURE)
    return int(num_features)


def ecosystem_stats(grid: Grid) -> dict[str, object]:
    """Summary counts for a generated grid."""
    biomes: Counter[str] = Counter()
    settlements: Counter[str] = Counter()
    features: Counter[str] = Counter()
    water_cells = 0
    road_cells = 0

    for _, _, cell in grid.each_cell():
        if cell.is_water:
            water_cells += 1
        else:
            biomes[cell.biome_type.value] += 1
        if cell.settlement_type != SettlementType.NONE:
            settlements[cell.settlement_type.value] += 1
        for feature in cell.special_features:
            features[feature.value] += 1
        if Infrastructure.ROAD in cell.infrastructure:
            road_cells += 1

    elevation = grid.layer("elevation")
    return {
        "cells": grid.width * grid.height,
        "water_cells": water_cells,
        "road_cells": road_cells,
        "road_networks": count_road_networks(grid),
        "mean_elevation": float(elevation.mean()),
        "biomes": dict(biomes),
        "settlements": dict(settlements),
        "features": dict(features),
    }
