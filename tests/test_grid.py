"""Tests for Grid storage, wrapping and neighbourhoods."""

import numpy as np
import pytest

from ecosystem.cell import TerrainCell
from ecosystem.exceptions import ConfigurationError
from ecosystem.grid import Grid


class TestConstruction:
    """Tests for grid construction."""

    def test_dimensions(self) -> None:
        """Grid exposes its dimensions and cell count."""
        grid = Grid(4, 3)
        assert grid.width == 4
        assert grid.height == 3
        assert len(grid.cells()) == 12

    def test_cells_are_defaults(self) -> None:
        """All cells start neutral."""
        grid = Grid(3, 3)
        assert all(cell == TerrainCell() for cell in grid.cells())

    def test_cells_are_distinct(self) -> None:
        """Each position holds its own cell object."""
        grid = Grid(2, 2)
        grid.get(0, 0).elevation = 10
        assert grid.get(1, 0).elevation == 128

    @pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, 5), (2.5, 5), (True, 5)])
    def test_invalid_dimensions(self, width, height) -> None:
        """Non-positive or non-integer dimensions are rejected."""
        with pytest.raises(ConfigurationError):
            Grid(width, height)


class TestWrappedAccess:
    """Tests for toroidal coordinate access."""

    def test_get_wraps(self, wrapped_grid: Grid) -> None:
        """Coordinates outside the grid map onto the opposite edge."""
        assert wrapped_grid.get(-1, 0) is wrapped_grid.get(4, 0)
        assert wrapped_grid.get(5, 7) is wrapped_grid.get(0, 2)

    def test_set_wraps(self, wrapped_grid: Grid) -> None:
        """Writes are normalized too."""
        cell = TerrainCell(elevation=3)
        wrapped_grid.set(-1, -1, cell)
        assert wrapped_grid.get(4, 4) is cell

    def test_neighbors_always_eight(self, wrapped_grid: Grid) -> None:
        """Corners still have eight wrapped neighbours."""
        neighbors = wrapped_grid.neighbors(0, 0)
        assert neighbors == [
            (4, 4), (0, 4), (1, 4),
            (4, 0), (1, 0),
            (4, 1), (0, 1), (1, 1),
        ]


class TestClippedAccess:
    """Tests for edge-clipped coordinate access."""

    def test_out_of_range_read_is_neutral(self, clipped_grid: Grid) -> None:
        """Reads outside the grid return a default cell."""
        cell = clipped_grid.get(-1, 0)
        assert cell == TerrainCell()

    def test_out_of_range_read_not_stored(self, clipped_grid: Grid) -> None:
        """Mutating the returned neutral cell has no effect on the grid."""
        clipped_grid.get(10, 10).elevation = 0
        assert clipped_grid.get(10, 10).elevation == 128
        assert all(cell.elevation == 128 for cell in clipped_grid.cells())

    def test_out_of_range_write_ignored(self, clipped_grid: Grid) -> None:
        """Writes outside the grid are dropped silently."""
        clipped_grid.set(5, 0, TerrainCell(elevation=1))
        clipped_grid.set(-1, 2, TerrainCell(elevation=1))
        assert all(cell.elevation == 128 for cell in clipped_grid.cells())

    def test_in_range_write(self, clipped_grid: Grid) -> None:
        """Writes inside the grid replace the cell."""
        cell = TerrainCell(elevation=1)
        clipped_grid.set(2, 3, cell)
        assert clipped_grid.get(2, 3) is cell

    def test_corner_neighbors(self, clipped_grid: Grid) -> None:
        """Corner cells have three neighbours."""
        assert clipped_grid.neighbors(0, 0) == [(1, 0), (0, 1), (1, 1)]

    def test_edge_neighbors(self, clipped_grid: Grid) -> None:
        """Edge cells have five neighbours."""
        assert len(clipped_grid.neighbors(2, 0)) == 5

    def test_interior_neighbors(self, clipped_grid: Grid) -> None:
        """Interior cells have eight neighbours."""
        assert len(clipped_grid.neighbors(2, 2)) == 8


class TestNeighborWater:
    """Tests for water adjacency."""

    def test_any_neighbor_water(self, clipped_grid: Grid) -> None:
        """Detects water in the Moore neighbourhood only."""
        clipped_grid.get(1, 1).water_level = 5
        assert clipped_grid.any_neighbor_water(2, 2)
        assert clipped_grid.any_neighbor_water(0, 0)
        assert not clipped_grid.any_neighbor_water(3, 3)
        assert not clipped_grid.any_neighbor_water(1, 1)


class TestTraversal:
    """Tests for row-major enumeration."""

    def test_each_cell_row_major(self) -> None:
        """Cells are visited row by row."""
        grid = Grid(3, 2)
        coords = [(x, y) for x, y, _ in grid.each_cell()]
        assert coords == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]

    def test_positions_match_each_cell(self) -> None:
        """positions() and each_cell() agree."""
        grid = Grid(3, 4)
        assert list(grid.positions()) == [(x, y) for x, y, _ in grid.each_cell()]

    def test_each_cell_yields_stored_cells(self) -> None:
        """each_cell yields the same objects as get."""
        grid = Grid(3, 3)
        for x, y, cell in grid.each_cell():
            assert cell is grid.get(x, y)


class TestLayers:
    """Tests for numpy layer export."""

    def test_layer_shape_and_values(self) -> None:
        """Layer is (height, width) uint8 indexed [y, x]."""
        grid = Grid(4, 2)
        grid.get(3, 1).elevation = 250
        layer = grid.layer("elevation")
        assert layer.shape == (2, 4)
        assert layer.dtype == np.uint8
        assert layer[1, 3] == 250
        assert layer[0, 0] == 128

    def test_unknown_layer(self) -> None:
        """Non-numeric attributes are rejected."""
        with pytest.raises(ValueError):
            Grid(2, 2).layer("biome_type")

    def test_mask(self) -> None:
        """Mask marks matching cells."""
        grid = Grid(3, 3)
        grid.get(1, 2).water_level = 9
        mask = grid.mask(lambda cell: cell.is_water)
        assert mask.shape == (3, 3)
        assert mask.sum() == 1
        assert mask[2, 1]


class TestCopyAndEquality:
    """Tests for grid copy and comparison."""

    def test_copy_equal_and_independent(self) -> None:
        """Copy compares equal but shares no cells."""
        grid = Grid(3, 3, wrap=False)
        grid.get(0, 0).elevation = 5
        clone = grid.copy()
        assert clone == grid
        clone.get(0, 0).elevation = 6
        assert grid.get(0, 0).elevation == 5
        assert clone != grid

    def test_wrap_mode_matters(self) -> None:
        """Grids differing only in wrap mode are not equal."""
        assert Grid(2, 2, wrap=True) != Grid(2, 2, wrap=False)
