# src/realmgen/towngen/paths.py
# Footpaths from houses to the road network.
# A share of houses is wired straight to the nearest road; the rest attach to
# whatever path or connected house is closest, over a bounded number of passes.

import logging
import math
from typing import List, Optional, Sequence, Set, Tuple

from ..grid import Point, grid_size, manhattan
from ..rng import SeededRNG
from ..tiles import BUILDING, DIRT_PATH, GRASS, ROAD_TYPES, STONE_PATH
from .layout import TownGrid

DIRECT_SHARE = 0.3
MAX_PASSES = 10
MAX_LINK_DISTANCE = 10


def houses_and_paths(grid: TownGrid) -> Tuple[List[Point], List[Point]]:
    houses: List[Point] = []
    paths: List[Point] = []
    for row in grid:
        for tile in row:
            if tile.type == BUILDING and tile.building_type == "house":
                houses.append(Point(tile.x, tile.y))
            if tile.type in ROAD_TYPES:
                paths.append(Point(tile.x, tile.y))
    return houses, paths


def carve_path(grid: TownGrid, start: Point, goal: Point, center: Point, paths: List[Point]) -> int:
    """Walk x first, then y, paving grass along the way. Returns tiles paved."""
    w, h = grid_size(grid)
    stone_radius = max(w, h) // 4
    x, y = start
    paved = 0
    while (x, y) != tuple(goal):
        if x < goal.x:
            x += 1
        elif x > goal.x:
            x -= 1
        elif y < goal.y:
            y += 1
        else:
            y -= 1
        tile = grid[y][x]
        if tile.type == GRASS and tile.poi is None:
            tile.type = STONE_PATH if manhattan((x, y), center) < stone_radius else DIRT_PATH
            paths.append(Point(x, y))
            paved += 1
    return paved


def nearest(origin: Point, targets: Sequence[Point]) -> Tuple[Optional[Point], float]:
    best: Optional[Point] = None
    best_dist = math.inf
    for t in targets:
        d = manhattan(origin, t)
        if 0 < d < best_dist:
            best, best_dist = t, d
    return best, best_dist


def best_link(house: Point, paths: Sequence[Point], houses: Sequence[Point], connected: Set[Point]):
    best, best_dist = nearest(house, paths)
    other, other_dist = nearest(house, [h for h in houses if h in connected])
    # Paths win ties since they are scanned first.
    if other is not None and other_dist < best_dist:
        return other, other_dist
    return best, best_dist


def generate_building_paths(grid: TownGrid, center: Point, rng: SeededRNG, log: logging.Logger) -> Set[Point]:
    """Connect houses to the roads. Returns the set of connected houses."""
    houses, paths = houses_and_paths(grid)
    direct = math.ceil(len(houses) * DIRECT_SHARE)
    order = list(houses)
    rng.shuffle(order)
    connected: Set[Point] = set()

    for house in order[:direct]:
        target, dist = nearest(house, paths)
        if target is not None and dist > 1:
            carve_path(grid, house, target, center, paths)
            connected.add(house)

    pending = order[direct:]
    for _ in range(MAX_PASSES):
        if not pending:
            break
        still: List[Point] = []
        for house in pending:
            target, dist = best_link(house, paths, order, connected)
            if target is not None and 1 < dist < MAX_LINK_DISTANCE:
                carve_path(grid, house, target, center, paths)
                connected.add(house)
            else:
                still.append(house)
        if len(still) == len(pending):
            break
        pending = still

    log.debug("Building paths: %d direct links, %d of %d houses connected", direct, len(connected), len(houses))
    return connected
