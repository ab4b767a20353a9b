"""Toroidal (or edge-clipped) grid of terrain cells."""

from typing import Callable, Iterator

import numpy as np
from numpy.typing import NDArray

from .cell import NUMERIC_ATTRIBUTES, TerrainCell
from .exceptions import ConfigurationError

# Moore neighbourhood offsets: NW, N, NE, W, E, SW, S, SE
NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
)


class Grid:
    """Dense row-major store of terrain cells.

    With ``wrap`` enabled every coordinate is normalized by modulo, so the
    grid behaves as a torus. Without it, reads outside the grid return a
    fresh neutral cell and writes outside the grid are dropped.
    """

    def __init__(self, width: int, height: int, wrap: bool = True):
        """Initialize grid with default cells.

        Args:
            width: Number of columns.
            height: Number of rows.
            wrap: Whether edges connect to the opposite edge.

        Raises:
            ConfigurationError: If a dimension is not a positive integer.
        """
        for name, value in (("width", width), ("height", height)):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(
                    f"Grid {name} must be a positive integer, got {value!r}"
                )
        self.width = width
        self.height = height
        self.wrap = wrap
        self._cells: list[TerrainCell] = [
            TerrainCell() for _ in range(width * height)
        ]

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height}, wrap={self.wrap})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.wrap == other.wrap
            and self._cells == other._cells
        )

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if raw coordinates lie inside the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def normalize(self, x: int, y: int) -> tuple[int, int]:
        """Wrap coordinates onto the torus (identity when wrap is off)."""
        if self.wrap:
            return x % self.width, y % self.height
        return x, y

    def get(self, x: int, y: int) -> TerrainCell:
        """Get the cell at a position.

        Out-of-range reads on a non-wrapping grid return a new default cell
        that is not stored in the grid.
        """
        x, y = self.normalize(x, y)
        if not self.in_bounds(x, y):
            return TerrainCell()
        return self._cells[y * self.width + x]

    def set(self, x: int, y: int, cell: TerrainCell) -> None:
        """Replace the cell at a position. Out-of-range writes are ignored."""
        x, y = self.normalize(x, y)
        if not self.in_bounds(x, y):
            return
        self._cells[y * self.width + x] = cell

    def neighbors(self, x: int, y: int) -> list[tuple[int, int]]:
        """Moore neighbourhood coordinates of a position.

        Returns all eight normalized positions when wrapping, otherwise only
        the in-bounds ones.
        """
        result = []
        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = self.normalize(x + dx, y + dy)
            if self.in_bounds(nx, ny):
                result.append((nx, ny))
        return result

    def neighbor_cells(self, x: int, y: int) -> list[TerrainCell]:
        """Cells in the Moore neighbourhood of a position."""
        return [self._cells[ny * self.width + nx] for nx, ny in self.neighbors(x, y)]

    def any_neighbor_water(self, x: int, y: int) -> bool:
        """Check if any neighbouring cell holds water."""
        return any(cell.is_water for cell in self.neighbor_cells(x, y))

    def positions(self) -> Iterator[tuple[int, int]]:
        """Iterate over all positions in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def each_cell(self) -> Iterator[tuple[int, int, TerrainCell]]:
        """Iterate over ``(x, y, cell)`` in row-major order."""
        for y in range(self.height):
            row_start = y * self.width
            for x in range(self.width):
                yield x, y, self._cells[row_start + x]

    def cells(self) -> list[TerrainCell]:
        """All cells in row-major order."""
        return list(self._cells)

    def layer(self, attribute: str) -> NDArray[np.uint8]:
        """Extract a numeric attribute as a (height, width) array.

        Raises:
            ValueError: If the attribute is not a 0-255 numeric attribute.
        """
        if attribute not in NUMERIC_ATTRIBUTES:
            raise ValueError(
                f"Unknown numeric attribute {attribute!r}; "
                f"expected one of {', '.join(NUMERIC_ATTRIBUTES)}"
            )
        values = [getattr(cell, attribute) for cell in self._cells]
        return np.array(values, dtype=np.uint8).reshape(self.height, self.width)

    def mask(self, predicate: Callable[[TerrainCell], bool]) -> NDArray[np.bool_]:
        """Boolean (height, width) array of cells matching a predicate."""
        values = [bool(predicate(cell)) for cell in self._cells]
        return np.array(values, dtype=np.bool_).reshape(self.height, self.width)

    def copy(self) -> "Grid":
        """Return an independent deep copy of the grid."""
        clone = Grid(self.width, self.height, self.wrap)
        clone._cells = [cell.copy() for cell in self._cells]
        return clone
