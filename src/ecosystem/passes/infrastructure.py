"""Pass 6: roads between nearest settlements."""

import math
from dataclasses import dataclass, field

import numpy as np

from ..config import GenerationOptions
from ..grid import Grid
from ..types import ExplorationStatus, Infrastructure


@dataclass
class RoadSegment:
    """A road drawn from one settlement to its nearest neighbour."""

    start: tuple[int, int]
    end: tuple[int, int]
    path: list[tuple[int, int]] = field(default_factory=list)


def rasterize_line(
    start: tuple[int, int], end: tuple[int, int]
) -> list[tuple[int, int]]:
    """Positions on a 4-connected line from start to end, both inclusive.

    Each step moves along exactly one axis, so the path has
    ``1 + |dx| + |dy|`` positions.
    """
    x, y = start
    x2, y2 = end
    dx = abs(x2 - x)
    dy = abs(y2 - y)
    x_inc = 1 if x2 > x else -1
    y_inc = 1 if y2 > y else -1
    error = dx - dy
    dx *= 2
    dy *= 2

    path = []
    for _ in range(1 + abs(x2 - x) + abs(y2 - y)):
        path.append((x, y))
        if error > 0:
            x += x_inc
            error -= dy
        else:
            y += y_inc
            error += dx
    return path


def find_settlements(grid: Grid) -> list[tuple[int, int]]:
    """Positions of hamlets, villages, towns and cities in row-major order."""
    return [
        (x, y) for x, y, cell in grid.each_cell()
        if cell.settlement_type.is_settlement
    ]


def nearest_settlement(
    origin: tuple[int, int], settlements: list[tuple[int, int]]
) -> tuple[int, int] | None:
    """Closest other settlement by Euclidean distance.

    Ties go to the earliest position in the list.
    """
    others = [pos for pos in settlements if pos != origin]
    if not others:
        return None
    ox, oy = origin
    return min(others, key=lambda pos: math.hypot(pos[0] - ox, pos[1] - oy))


def lay_road(grid: Grid, path: list[tuple[int, int]]) -> int:
    """Mark land, non-settlement cells along a path as road.

    Returns:
        Number of cells that gained a road.
    """
    added = 0
    for x, y in path:
        cell = grid.get(x, y)
        if cell.is_water or cell.settlement_type.is_settlement:
            continue
        if Infrastructure.ROAD not in cell.infrastructure:
            cell.infrastructure.add(Infrastructure.ROAD)
            added += 1
        if cell.exploration_status != ExplorationStatus.SETTLED:
            cell.exploration_status = ExplorationStatus.MAPPED
    return added


def build_roads(
    grid: Grid, options: GenerationOptions, rng: np.random.Generator
) -> list[RoadSegment]:
    """Connect every settlement to its nearest neighbour.

    The result is a nearest-neighbour forest: pairs may be connected twice
    and separate clusters stay disconnected.

    Returns:
        One segment per settlement that has a neighbour.
    """
    settlements = find_settlements(grid)
    segments = []
    for origin in settlements:
        target = nearest_settlement(origin, settlements)
        if target is None:
            continue
        segment = RoadSegment(origin, target, rasterize_line(origin, target))
        lay_road(grid, segment.path)
        segments.append(segment)
    return segments
