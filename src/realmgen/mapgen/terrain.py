# src/realmgen/mapgen/terrain.py
# Natural feature passes: coast, lakes, forests, mountain ranges, rivers.
# Each pass consumes the shared RNG in a fixed order; reordering draws changes
# every world generated from a given seed.

import logging
from typing import List, Sequence, Tuple

from ..grid import Point, grid_size, iter_cells, manhattan
from ..pathfinding import WorldMap, find_path, mark_river_tiles
from ..rng import SeededRNG
from ..tiles import BEACH, FOREST, MOUNTAIN, PLAINS, WATER

# Growth directions: E, W, S, N
GROWTH_DIRS: Tuple[Tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))

N_EDGE, E_EDGE, S_EDGE, W_EDGE = 0, 1, 2, 3


def is_valid_placement(map_data: WorldMap, x: int, y: int, allow_beach: bool = True) -> bool:
    w, h = grid_size(map_data)
    if not (0 <= x < w and 0 <= y < h):
        return False
    tile = map_data[y][x]
    if tile.poi is not None or tile.biome == WATER:
        return False
    if not allow_beach and tile.biome == BEACH:
        return False
    return True


def near_coast(map_data: WorldMap, x: int, y: int) -> bool:
    """True if any tile in the 3x3 window around (x, y) is water or beach."""
    w, h = grid_size(map_data)
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            nx, ny = x + dx, y + dy
            if 0 <= nx < w and 0 <= ny < h and map_data[ny][nx].biome in (WATER, BEACH):
                return True
    return False


# ---------- Coast ----------

def coast_tile_coords(edge: int, i: int, d: int, width: int, height: int) -> Tuple[int, int]:
    if edge == N_EDGE:
        return i, d
    if edge == E_EDGE:
        return width - 1 - d, i
    if edge == S_EDGE:
        return i, height - 1 - d
    return d, i


def place_coast(map_data: WorldMap, rng: SeededRNG) -> int:
    """Sea band along one random edge; the innermost row is beach. Returns the edge."""
    w, h = grid_size(map_data)
    edge = rng.below(4)
    depth = 2 + rng.below(2)
    length = w if edge in (N_EDGE, S_EDGE) else h
    for i in range(length):
        for d in range(depth):
            x, y = coast_tile_coords(edge, i, d, w, h)
            tile = map_data[y][x]
            if d == depth - 1:
                tile.biome = BEACH
                tile.beach_direction = edge
                tile.description_seed = "A sandy beach"
            else:
                tile.biome = WATER
                tile.description_seed = "The coastal sea"
    return edge


# ---------- Lakes ----------

def place_lake(map_data: WorldMap, rng: SeededRNG, attempts: int = 50) -> bool:
    w, h = grid_size(map_data)
    for _ in range(attempts):
        x = 2 + rng.below(w - 4)
        y = 2 + rng.below(h - 4)
        if not (0 <= x < w and 0 <= y < h):
            continue
        tile = map_data[y][x]
        if tile.biome == PLAINS and not near_coast(map_data, x, y):
            tile.biome = WATER
            tile.description_seed = "A clear lake"
            tile.is_lake = True
            return True
    return False


# ---------- Forests / mountains ----------

def find_cluster_start(map_data: WorldMap, rng: SeededRNG, avoid: Sequence[str], attempts: int = 10) -> Point:
    # The last candidate is kept even if every attempt hit an avoided biome.
    w, h = grid_size(map_data)
    x = y = 0
    for _ in range(attempts):
        x = 1 + rng.below(w - 2)
        y = 1 + rng.below(h - 2)
        if map_data[y][x].biome not in avoid:
            break
    return Point(x, y)


def grow_cluster(tiles: List[Point], target: int, map_data: WorldMap, rng: SeededRNG) -> None:
    """Grow outward from random existing members until *target* slots are tried."""
    for _ in range(len(tiles), target):
        base = tiles[rng.below(len(tiles))]
        for _attempt in range(4):
            dx, dy = GROWTH_DIRS[rng.below(len(GROWTH_DIRS))]
            nx, ny = base.x + dx, base.y + dy
            if is_valid_placement(map_data, nx, ny, allow_beach=True):
                tiles.append(Point(nx, ny))
                break


def grow_range(tiles: List[Point], target: int, map_data: WorldMap, rng: SeededRNG) -> None:
    """Grow a line from the most recently added tile; ranges never touch beach."""
    for _ in range(1, target):
        last = tiles[-1]
        for _attempt in range(4):
            dx, dy = GROWTH_DIRS[rng.below(len(GROWTH_DIRS))]
            nx, ny = last.x + dx, last.y + dy
            if is_valid_placement(map_data, nx, ny, allow_beach=False):
                tiles.append(Point(nx, ny))
                break


def place_forest_cluster(map_data: WorldMap, rng: SeededRNG) -> List[Point]:
    size = 2 + rng.below(3)
    tiles = [find_cluster_start(map_data, rng, (WATER,))]
    grow_cluster(tiles, size, map_data, rng)
    for p in tiles:
        tile = map_data[p.y][p.x]
        if tile.poi is None and tile.biome != WATER:
            tile.poi = FOREST
            tile.description_seed = "Dense woods"
    return tiles


def place_mountain_range(map_data: WorldMap, rng: SeededRNG) -> List[Point]:
    size = 2 + rng.below(2)
    tiles = [find_cluster_start(map_data, rng, (WATER, BEACH))]
    grow_range(tiles, size, map_data, rng)
    for p in tiles:
        tile = map_data[p.y][p.x]
        if tile.poi is None and tile.biome != WATER:
            tile.poi = MOUNTAIN
            tile.description_seed = "Rocky peaks"
    return tiles


# ---------- Rivers ----------

def water_tiles(map_data: WorldMap) -> List[Point]:
    return [Point(t.x, t.y) for t in iter_cells(map_data) if t.biome == WATER]


def nearest_water(source: Point, waters: Sequence[Point]) -> Point:
    target = waters[0]
    best = None
    for wpos in waters:
        dist = manhattan(wpos, source)
        if best is None or dist < best:
            best = dist
            target = wpos
    return target


def generate_rivers(map_data: WorldMap, mountain_tiles: Sequence[Point], rng: SeededRNG, log: logging.Logger) -> int:
    """Run 1-2 rivers from shuffled range tiles to their nearest water."""
    waters = water_tiles(map_data)
    if not waters:
        log.debug("No water on the map; skipping rivers")
        return 0

    count = min(len(mountain_tiles), 1 + rng.below(2))
    sources = list(mountain_tiles)
    rng.shuffle(sources)

    rivers = []
    for source in sources[:count]:
        target = nearest_water(source, waters)
        path = find_path(map_data, source, target)
        if path is None:
            log.warning("No river course from (%d,%d) to (%d,%d)", source.x, source.y, target.x, target.y)
            continue
        rivers.append(path)

    if rivers:
        mark_river_tiles(map_data, rivers, log)
    return len(rivers)


def place_natural_features(map_data: WorldMap, rng: SeededRNG, log: logging.Logger) -> List[Point]:
    """Coast, lakes, forests, mountains and rivers. Returns every mountain-range position."""
    edge = place_coast(map_data, rng)
    log.debug("Coast on edge %d", edge)

    lakes = 1 + rng.below(2)
    placed = sum(place_lake(map_data, rng) for _ in range(lakes))
    log.debug("Placed %d of %d lakes", placed, lakes)

    forests = 3 + rng.below(3)
    for _ in range(forests):
        place_forest_cluster(map_data, rng)

    ranges = max(1, 2 + rng.below(2))
    mountain_tiles: List[Point] = []
    for _ in range(ranges):
        mountain_tiles.extend(place_mountain_range(map_data, rng))
    log.debug("Placed %d forest clusters and %d mountain ranges", forests, ranges)

    if mountain_tiles:
        generate_rivers(map_data, mountain_tiles, rng, log)
    return mountain_tiles
