"""Tests for the resource pass."""

import numpy as np

from ecosystem.config import GenerationOptions
from ecosystem.passes.resources import generate_resources


def _run(grid, seed: int = 0) -> None:
    generate_resources(grid, GenerationOptions(), np.random.default_rng(seed))


class TestMinerals:
    """Tests for mineral deposits."""

    def test_no_minerals_in_lowlands(self, land_grid) -> None:
        """Cells at or below 160 never gain deposits."""
        grid = land_grid(20, 20, elevation=160)
        _run(grid)
        assert all(not cell.mineral_deposits for cell in grid.cells())

    def test_minerals_in_mountains(self, land_grid) -> None:
        """Roughly one in ten mountain cells gains a single deposit."""
        grid = land_grid(40, 40, elevation=220)
        _run(grid, seed=4)
        with_deposits = [cell for cell in grid.cells() if cell.mineral_deposits]
        assert 80 < len(with_deposits) < 250
        assert all(len(cell.mineral_deposits) == 1 for cell in with_deposits)

    def test_water_skipped(self, land_grid) -> None:
        """Water cells gain nothing and keep their magic."""
        grid = land_grid(10, 10, elevation=220, water_level=5)
        _run(grid)
        assert all(not cell.mineral_deposits for cell in grid.cells())
        assert all(cell.magical_energy == 32 for cell in grid.cells())


class TestMagicalEnergy:
    """Tests for magical energy diffusion."""

    def test_stays_in_range(self, land_grid) -> None:
        """Energy is clamped to [0, 255]."""
        low = land_grid(10, 10, magical_energy=0)
        high = land_grid(10, 10, magical_energy=255)
        _run(low)
        _run(high)
        assert low.layer("magical_energy").min() >= 0
        assert high.layer("magical_energy").max() <= 255

    def test_jitter_bounded(self, land_grid) -> None:
        """On a uniform field the first cell moves by at most 20."""
        grid = land_grid(10, 10, magical_energy=100)
        _run(grid, seed=9)
        assert abs(grid.get(0, 0).magical_energy - 100) <= 20

    def test_reproducible(self, land_grid) -> None:
        """Same seed gives the same field."""
        a = land_grid(12, 12, elevation=200)
        b = land_grid(12, 12, elevation=200)
        _run(a, seed=21)
        _run(b, seed=21)
        assert a == b


class _ZeroJitterRng:
    """Generator stand-in whose draws are always zero."""

    def random(self) -> float:
        return 0.0

    def integers(self, low: int, high: int | None = None) -> int:
        return 0


class TestInPlaceDiffusion:
    """Magical energy updates are visible to later cells in the same sweep."""

    def test_worked_row(self, land_grid) -> None:
        """The second cell averages against the first cell's new value."""
        grid = land_grid(3, 1)
        for x, energy in enumerate([0, 100, 200]):
            grid.get(x, 0).magical_energy = energy
        generate_resources(grid, GenerationOptions(), _ZeroJitterRng())
        # (0 + 100) / 2 = 50
        # (100 + (50 + 200) / 2) / 2 = 112.5 -> 113
        # (200 + 113) / 2 = 156.5 -> 157
        assert [grid.get(x, 0).magical_energy for x in range(3)] == [50, 113, 157]
