# src/realmgen/towngen/scatter.py
# Farm-field clusters and decorative POIs on leftover grass.

import logging
import math
from typing import Optional

from ..grid import Point, grid_size
from ..rng import SeededRNG
from ..tiles import CITY, FARM_FIELD, GRASS, HAMLET, TOWN_SIZE, VILLAGE
from .layout import TownGrid

FARM_CLUSTERS = {HAMLET: 2, VILLAGE: 4, TOWN_SIZE: 6}
FARM_START_ATTEMPTS = 10

DECORATION_COUNT = {HAMLET: 36, VILLAGE: 45, TOWN_SIZE: 36, CITY: 24}
DEFAULT_DECORATIONS = 30
DECORATIONS = ("tree", "tree", "tree", "tree", "bush", "flowers", "tree", "tree")


def has_farms(town_size: str) -> bool:
    return town_size in FARM_CLUSTERS


def farm_start(grid: TownGrid, rng: SeededRNG) -> Optional[Point]:
    w, h = grid_size(grid)
    for _ in range(FARM_START_ATTEMPTS):
        x = rng.below(w)
        y = rng.below(h)
        if math.hypot(x - w / 2, y - h / 2) > w / 4 and grid[y][x].type == GRASS:
            return Point(x, y)
    return None


def place_farm_fields(grid: TownGrid, town_size: str, rng: SeededRNG, log: logging.Logger) -> int:
    """Rectangular 2-3 x 2-3 field clusters away from the centre. Returns tiles planted."""
    w, h = grid_size(grid)
    planted = 0
    for _ in range(FARM_CLUSTERS.get(town_size, 0)):
        start = farm_start(grid, rng)
        if start is None:
            continue
        cw = 2 + rng.below(2)
        ch = 2 + rng.below(2)
        for y in range(start.y, min(start.y + ch, h)):
            for x in range(start.x, min(start.x + cw, w)):
                tile = grid[y][x]
                if tile.type == GRASS and tile.poi is None:
                    tile.type = FARM_FIELD
                    planted += 1
    log.debug("Planted %d farm-field tiles", planted)
    return planted


def place_decorations(grid: TownGrid, town_size: str, rng: SeededRNG) -> int:
    w, h = grid_size(grid)
    placed = 0
    for _ in range(DECORATION_COUNT.get(town_size, DEFAULT_DECORATIONS)):
        x = rng.below(w)
        y = rng.below(h)
        tile = grid[y][x]
        if tile.type == GRASS and tile.poi is None:
            tile.poi = DECORATIONS[rng.below(len(DECORATIONS))]
            placed += 1
    return placed
