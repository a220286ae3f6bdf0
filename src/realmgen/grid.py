# src/realmgen/grid.py
# Row-major grid helpers shared by the world and town maps.
# Grids are List[List[tile]] indexed as grid[y][x].

from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")

Grid = List[List[T]]


class Point(NamedTuple):
    x: int
    y: int


# N, E, S, W
CARDINALS: Tuple[Tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))


def grid_size(grid: Sequence[Sequence[T]]) -> Tuple[int, int]:
    h = len(grid)
    w = len(grid[0]) if h else 0
    return w, h


def in_bounds(grid: Sequence[Sequence[T]], x: int, y: int) -> bool:
    w, h = grid_size(grid)
    return 0 <= x < w and 0 <= y < h


def cell_at(grid: Sequence[Sequence[T]], x: int, y: int) -> Optional[T]:
    if not in_bounds(grid, x, y):
        return None
    return grid[y][x]


def iter_cells(grid: Sequence[Sequence[T]]) -> Iterator[T]:
    for row in grid:
        yield from row


def manhattan(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])
