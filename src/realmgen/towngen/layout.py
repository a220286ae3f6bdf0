# src/realmgen/towngen/layout.py
# Town skeleton: size table, entry point, river band, main road, square, walls.

from dataclasses import dataclass
from typing import List, NamedTuple, Optional

from ..grid import Point, grid_size
from ..rng import SeededRNG
from ..tiles import BRIDGE, CITY, DIRT_PATH, HAMLET, RIVER, STONE_PATH, TOWN_SIZE, TOWN_SQUARE, VILLAGE, WALL, TownTile

TownGrid = List[List[TownTile]]


class SizeConfig(NamedTuple):
    width: int
    height: int
    buildings: int


SIZE_CONFIG = {
    HAMLET: SizeConfig(8, 8, 3),
    VILLAGE: SizeConfig(12, 12, 6),
    TOWN_SIZE: SizeConfig(16, 16, 10),
    CITY: SizeConfig(20, 20, 15),
}
DEFAULT_SIZE = SIZE_CONFIG[VILLAGE]

# Square side length; unknown sizes fall back to 2.
SQUARE_SIDE = {HAMLET: 1, VILLAGE: 2, TOWN_SIZE: 3, CITY: 3}

ENTRY_DIRECTIONS = ("north", "south", "east", "west")

RIVER_WIDTH = 2


def size_config(town_size: str) -> SizeConfig:
    return SIZE_CONFIG.get(town_size, DEFAULT_SIZE)


def square_half_size(town_size: str) -> int:
    return SQUARE_SIDE.get(town_size, 2) // 2


def entry_position(width: int, height: int, direction: str) -> Point:
    """Edge midpoint for *direction*; anything unrecognised enters from the south."""
    if direction == "north":
        return Point(width // 2, 0)
    if direction == "east":
        return Point(width - 1, height // 2)
    if direction == "west":
        return Point(0, height // 2)
    return Point(width // 2, height - 1)


# ---------- River ----------

@dataclass(frozen=True)
class RiverBand:
    horizontal: bool
    start: int
    width: int = RIVER_WIDTH

    def covers(self, x: int, y: int) -> bool:
        v = y if self.horizontal else x
        return self.start <= v < self.start + self.width


def place_river(grid: TownGrid, river_direction: str, rng: SeededRNG) -> RiverBand:
    w, h = grid_size(grid)
    horizontal = river_direction == "EAST_WEST"
    offset = rng.below(3) - 1
    band = RiverBand(horizontal, (h if horizontal else w) // 2 + offset)
    for row in grid:
        for tile in row:
            if band.covers(tile.x, tile.y):
                tile.type = RIVER
                tile.walkable = False
    return band


# ---------- Main road ----------

def _road_tile(grid: TownGrid, x: int, y: int, road_type: str, river: Optional[RiverBand]) -> None:
    tile = grid[y][x]
    if river is not None and river.covers(x, y):
        tile.type = BRIDGE
        tile.walkable = True
        return
    tile.type = road_type


def place_main_road(
    grid: TownGrid,
    entry: Point,
    direction: str,
    town_size: str,
    river: Optional[RiverBand] = None,
) -> int:
    """Road from the entry to the centre line. Returns the number of tiles laid."""
    w, h = grid_size(grid)
    cx, cy = w // 2, h // 2
    wide = town_size in (TOWN_SIZE, CITY)
    road_type = STONE_PATH if town_size == CITY else DIRT_PATH

    laid = 0
    if direction in ("north", "south"):
        for y in range(min(entry.y, cy), max(entry.y, cy) + 1):
            _road_tile(grid, cx, y, road_type, river)
            laid += 1
            if wide and cx < w - 1:
                _road_tile(grid, cx + 1, y, road_type, river)
                laid += 1
    else:
        for x in range(min(entry.x, cx), max(entry.x, cx) + 1):
            _road_tile(grid, x, cy, road_type, river)
            laid += 1
            if wide and cy < h - 1:
                _road_tile(grid, x, cy + 1, road_type, river)
                laid += 1
    return laid


# ---------- Square ----------

def place_square(grid: TownGrid, center: Point, town_size: str) -> None:
    w, h = grid_size(grid)
    half = square_half_size(town_size)
    for dy in range(-half, half + 1):
        for dx in range(-half, half + 1):
            x, y = center.x + dx, center.y + dy
            if not (0 <= x < w and 0 <= y < h):
                continue
            tile = grid[y][x]
            tile.type = TOWN_SQUARE
            tile.walkable = True
            if dx == 0 and dy == 0:
                tile.poi = "fountain" if town_size == CITY else "well"


# ---------- Walls ----------

def border_cells(width: int, height: int):
    for x in range(width):
        yield x, 0
        yield x, height - 1
    for y in range(1, height - 1):
        yield 0, y
        yield width - 1, y


def place_city_walls(grid: TownGrid, entry: Point) -> int:
    """Wall the whole border except the entry gap and river crossings."""
    w, h = grid_size(grid)
    placed = 0
    for x, y in border_cells(w, h):
        tile = grid[y][x]
        if (x, y) == tuple(entry) or tile.type in (RIVER, BRIDGE) or tile.type == WALL:
            continue
        tile.type = WALL
        tile.walkable = False
        tile.poi = None
        placed += 1
    return placed
