"""Shared test fixtures for ecosystem tests."""

import pytest

from ecosystem.grid import Grid
from ecosystem.pipeline import GenerationResult, generate_ecosystem


def make_land_grid(
    width: int,
    height: int,
    wrap: bool = False,
    **attributes: object,
) -> Grid:
    """Grid of identical land cells with the given attributes applied."""
    grid = Grid(width, height, wrap=wrap)
    for _, _, cell in grid.each_cell():
        for name, value in attributes.items():
            setattr(cell, name, value)
    return grid


@pytest.fixture
def wrapped_grid() -> Grid:
    """5x5 toroidal grid of default cells."""
    return Grid(5, 5, wrap=True)


@pytest.fixture
def clipped_grid() -> Grid:
    """5x5 edge-clipped grid of default cells."""
    return Grid(5, 5, wrap=False)


@pytest.fixture
def generated() -> GenerationResult:
    """Fully generated 24x24 ecosystem with a dense settlement setting."""
    return generate_ecosystem(
        24,
        24,
        {"seed": 42, "settlement_density": 0.1, "feature_density": 0.05},
    )


@pytest.fixture
def land_grid():
    """Factory for grids of identical land cells."""
    return make_land_grid
