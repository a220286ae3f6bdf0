# src/realmgen/towngen/buildings.py
# Building placement: keep, important buildings around the square, houses.

import logging
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Set, Tuple

from ..grid import Point, grid_size
from ..names import BUILDING_NAMERS
from ..rng import SeededRNG
from ..tiles import BUILDING, CITY, GRASS, HAMLET, KEEP_WALL, STONE_PATH, TOWN_SIZE, VILLAGE, TownTile
from .layout import TownGrid, square_half_size

KEEP_ROW = 3


class BuildingConfig(NamedTuple):
    important: Tuple[str, ...]
    houses: int
    has_keep: bool = False


BUILDING_CONFIG = {
    HAMLET: BuildingConfig(("barn",), 5),
    VILLAGE: BuildingConfig(("inn", "shop", "blacksmith"), 8),
    TOWN_SIZE: BuildingConfig(("inn", "shop", "temple", "blacksmith", "tavern", "tavern"), 20),
    CITY: BuildingConfig(
        (
            "temple", "market", "manor", "blacksmith",
            "tavern", "tavern", "tavern",
            "guild", "guild", "guild",
            "bank", "bank", "bank",
        ),
        40,
        has_keep=True,
    ),
}
DEFAULT_BUILDINGS = BUILDING_CONFIG[VILLAGE]

# Chebyshev radius around the centre kept clear of houses.
HOUSE_EXCLUSION = {HAMLET: 1, VILLAGE: 2, TOWN_SIZE: 3, CITY: 3}


def building_config(town_size: str) -> BuildingConfig:
    return BUILDING_CONFIG.get(town_size, DEFAULT_BUILDINGS)


@dataclass
class Placement:
    grid: TownGrid
    rng: SeededRNG
    center: Point
    occupied: Set[Tuple[int, int]] = field(default_factory=set)

    @property
    def size(self) -> Tuple[int, int]:
        return grid_size(self.grid)

    def is_occupied(self, x: int, y: int) -> bool:
        """Out of bounds, already claimed, or anything but grass."""
        w, h = self.size
        if not (0 <= x < w and 0 <= y < h):
            return True
        if (x, y) in self.occupied:
            return True
        return self.grid[y][x].type != GRASS

    def mark(self, x: int, y: int) -> None:
        self.occupied.add((x, y))

    def place_building(self, x: int, y: int, building_type: str) -> TownTile:
        tile = self.grid[y][x]
        tile.type = BUILDING
        tile.building_type = building_type
        tile.walkable = False
        tile.poi = None
        namer = BUILDING_NAMERS.get(building_type)
        if namer is not None:
            tile.building_name = namer(self.rng)
        self.mark(x, y)
        return tile


# ---------- Keep ----------

def keep_site(state: Placement) -> Optional[Point]:
    """(cx, 3) when free, else the closest free cell in the upper band."""
    cx, cy = state.center
    if not state.is_occupied(cx, KEEP_ROW):
        return Point(cx, KEEP_ROW)
    w, _h = state.size
    candidates = [
        (x, y)
        for y in range(2, cy - 1)
        for x in range(2, w - 2)
        if not state.is_occupied(x, y)
    ]
    if not candidates:
        return None
    x, y = min(candidates, key=lambda p: (abs(p[1] - KEEP_ROW), abs(p[0] - cx), p[0]))
    return Point(x, y)


def place_keep_walls(state: Placement, keep: Point) -> int:
    w, h = state.size
    placed = 0
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            x, y = keep.x + dx, keep.y + dy
            if not (1 <= x < w - 1 and 1 <= y < h - 1):
                continue
            tile = state.grid[y][x]
            if tile.type == GRASS:
                tile.type = KEEP_WALL
                tile.walkable = False
                state.mark(x, y)
                placed += 1
    return placed


def place_keep_path(state: Placement, keep: Point) -> None:
    for y in range(keep.y + 2, state.center.y):
        tile = state.grid[y][keep.x]
        if tile.type == GRASS:
            tile.type = STONE_PATH


def place_keep(state: Placement, log: logging.Logger) -> Optional[TownTile]:
    site = keep_site(state)
    if site is None:
        log.warning("No room for a keep")
        return None
    tile = state.place_building(site.x, site.y, "keep")
    place_keep_walls(state, site)
    place_keep_path(state, site)
    log.debug("Placed keep %r at (%d,%d)", tile.building_name, site.x, site.y)
    return tile


# ---------- Important buildings ----------

def square_ring(center: Point, half: int) -> List[Point]:
    """Cells just outside the square, clockwise from the top-left corner."""
    cx, cy = center
    r = half + 1
    ring = [Point(cx + dx, cy - r) for dx in range(-r, r + 1)]
    ring += [Point(cx + r, cy + dy) for dy in range(-half, r + 1)]
    ring += [Point(cx + dx, cy + r) for dx in range(half, -r - 1, -1)]
    ring += [Point(cx - r, cy + dy) for dy in range(half, -half - 1, -1)]
    return ring


def place_in_rings(state: Placement, building_type: str) -> bool:
    cx, cy = state.center
    for radius in range(2, 5):
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                if abs(dx) != radius and abs(dy) != radius:
                    continue
                if not state.is_occupied(cx + dx, cy + dy):
                    state.place_building(cx + dx, cy + dy, building_type)
                    return True
    return False


def place_important_buildings(state: Placement, important: Tuple[str, ...], town_size: str) -> int:
    ring = square_ring(state.center, square_half_size(town_size))
    idx = state.rng.below(len(ring))
    placed = 0
    for building_type in important:
        for i in range(len(ring)):
            p = ring[(idx + i) % len(ring)]
            if not state.is_occupied(p.x, p.y):
                state.place_building(p.x, p.y, building_type)
                idx = (idx + i + 2) % len(ring)
                placed += 1
                break
        else:
            if place_in_rings(state, building_type):
                placed += 1
    return placed


# ---------- Houses ----------

def place_houses(state: Placement, quota: int, town_size: str) -> int:
    w, h = state.size
    cx, cy = state.center
    exclusion = HOUSE_EXCLUSION.get(town_size, 2)
    candidates = [
        Point(x, y)
        for y in range(1, h - 1)
        for x in range(1, w - 1)
        if max(abs(x - cx), abs(y - cy)) > exclusion
    ]
    state.rng.shuffle(candidates)

    placed = 0
    for p in candidates:
        if placed >= quota:
            break
        if not state.is_occupied(p.x, p.y):
            tile = state.grid[p.y][p.x]
            tile.type = BUILDING
            tile.building_type = "house"
            tile.walkable = False
            tile.poi = None
            state.mark(p.x, p.y)
            placed += 1
    return placed


def place_buildings(grid: TownGrid, town_size: str, rng: SeededRNG, center: Point, log: logging.Logger) -> int:
    """Keep (cities), important buildings, then houses. Returns the building count."""
    config = building_config(town_size)
    state = Placement(grid, rng, center)

    keep = 0
    if config.has_keep and place_keep(state, log) is not None:
        keep = 1

    important = place_important_buildings(state, config.important, town_size)
    log.debug("Placed %d of %d important buildings", important, len(config.important))
    houses = place_houses(state, config.houses, town_size)
    log.debug("Placed %d of %d houses", houses, config.houses)
    return keep + important + houses
