# src/realmgen/pathfinding.py
"""
A* search over the world grid, plus the helpers that turn paths into road and
river markings on tiles.

Step costs favour open land: plains 1, forest 2, mountain 5, beach 5 and
water 100. Water is expensive rather than blocked so degenerate maps still
resolve, but a route may not *start* in water.
"""

import heapq
import itertools
import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .grid import CARDINALS, Point, grid_size, manhattan
from .tiles import BEACH, FOREST, MOUNTAIN, TOWN, WATER, WorldTile

logger = logging.getLogger(__name__)

WorldMap = List[List[WorldTile]]
Path = List[Point]

WATER_COST = 100
BEACH_COST = 5
FOREST_COST = 2
MOUNTAIN_COST = 5
OPEN_COST = 1


def step_cost(tile: WorldTile) -> int:
    if tile.biome == WATER:
        return WATER_COST
    if tile.biome == BEACH:
        return BEACH_COST
    if tile.poi == FOREST:
        return FOREST_COST
    if tile.poi == MOUNTAIN:
        return MOUNTAIN_COST
    return OPEN_COST


# ---------- A* ----------

def find_path(map_data: WorldMap, start: Tuple[int, int], goal: Tuple[int, int]) -> Optional[Path]:
    """Cheapest 4-directional route from *start* to *goal*, both included.

    Returns ``None`` when there is no route; callers skip the connection.
    """
    w, h = grid_size(map_data)
    if w == 0 or h == 0:
        return None
    start, goal = Point(*start), Point(*goal)
    for p in (start, goal):
        if not (0 <= p.x < w and 0 <= p.y < h):
            return None
    if map_data[start.y][start.x].biome == WATER:
        return None

    # (f, insertion order, point): earlier entries win f-ties
    counter = itertools.count()
    open_heap: List[Tuple[int, int, Point]] = [(manhattan(start, goal), next(counter), start)]
    g_score: Dict[Point, int] = {start: 0}
    came_from: Dict[Point, Point] = {}
    closed: Set[Point] = set()

    while open_heap:
        _f, _n, current = heapq.heappop(open_heap)
        if current in closed:
            continue
        if current == goal:
            return _reconstruct(came_from, current)
        closed.add(current)

        for dx, dy in CARDINALS:
            nx, ny = current.x + dx, current.y + dy
            if not (0 <= nx < w and 0 <= ny < h):
                continue
            neighbor = Point(nx, ny)
            if neighbor in closed:
                continue
            tentative = g_score[current] + step_cost(map_data[ny][nx])
            if tentative < g_score.get(neighbor, float("inf")):
                came_from[neighbor] = current
                g_score[neighbor] = tentative
                heapq.heappush(open_heap, (tentative + manhattan(neighbor, goal), next(counter), neighbor))

    return None


def _reconstruct(came_from: Dict[Point, Point], current: Point) -> Path:
    path = [current]
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path


# ---------- Town network ----------

def find_nearest_towns(town: Tuple[int, int], towns: Sequence[Tuple[int, int]], count: int = 2) -> List[Point]:
    others = [Point(*t) for t in towns if tuple(t) != tuple(town)]
    others.sort(key=lambda t: manhattan(t, town))
    return others[:count]


def _pair_key(a: Tuple[int, int], b: Tuple[int, int]) -> str:
    return "->".join(sorted((f"{a[0]},{a[1]}", f"{b[0]},{b[1]}")))


def generate_town_paths(
    map_data: WorldMap,
    towns: Sequence[Tuple[int, int]],
    log: Optional[logging.Logger] = None,
) -> List[Path]:
    """Connect every town to its nearest neighbour(s), one path per pair."""
    log = log or logger
    paths: List[Path] = []
    connected: Set[str] = set()
    nearest_count = 1 if len(towns) <= 2 else 2

    for town in towns:
        for target in find_nearest_towns(town, towns, nearest_count):
            key = _pair_key(town, target)
            if key in connected:
                continue
            path = find_path(map_data, town, target)
            if path is None:
                log.warning("No road between (%d,%d) and (%d,%d)", town[0], town[1], target.x, target.y)
                continue
            paths.append(path)
            connected.add(key)
            log.debug("Road (%d,%d) -> (%d,%d) [%d tiles]", town[0], town[1], target.x, target.y, len(path))

    log.info("Generated %d roads between %d towns", len(paths), len(towns))
    return paths


# ---------- Direction tags ----------

_CURVES = {
    "NORTH_SOUTH": "NORTH_SOUTH",
    "EAST_WEST": "EAST_WEST",
    "EAST_NORTH": "NORTH_EAST",
    "NORTH_WEST": "NORTH_WEST",
    "EAST_SOUTH": "SOUTH_EAST",
    "SOUTH_WEST": "SOUTH_WEST",
}
_SINGLE = ("NORTH", "SOUTH", "EAST", "WEST")


def connection_name(neighbor: Tuple[int, int], tile: Tuple[int, int]) -> Optional[str]:
    """Side of *tile* on which *neighbor* sits."""
    if neighbor[1] < tile[1]:
        return "north"
    if neighbor[1] > tile[1]:
        return "south"
    if neighbor[0] < tile[0]:
        return "west"
    if neighbor[0] > tile[0]:
        return "east"
    return None


def _connections(path: Sequence[Tuple[int, int]], index: int) -> List[str]:
    tile = path[index]
    out: List[str] = []
    for j in (index - 1, index + 1):
        if 0 <= j < len(path):
            name = connection_name(path[j], tile)
            if name:
                out.append(name)
    return out


def calculate_path_direction(tile: Tuple[int, int], path: Sequence[Tuple[int, int]]) -> str:
    """Rendering tag for *tile*: straight, curve, start/end stub or intersection."""
    index = next((i for i, p in enumerate(path) if tuple(p) == tuple(tile)), -1)
    if index == -1:
        return "NONE"
    key = "_".join(sorted(_connections(path, index))).upper()
    if key in _CURVES:
        return _CURVES[key]
    if key in _SINGLE:
        return f"START_{key}" if index == 0 else f"END_{key}"
    return "INTERSECTION"


def _store_connections(connections: List[str], path: Sequence[Tuple[int, int]], index: int) -> None:
    tile = path[index]
    if index > 0:
        name = connection_name(path[index - 1], tile)
        if name:
            connections.append(name)
    if index < len(path) - 1:
        name = connection_name(path[index + 1], tile)
        if name and name not in connections:
            connections.append(name)


# ---------- Marking ----------

def mark_path_tiles(map_data: WorldMap, paths: Sequence[Path], log: Optional[logging.Logger] = None) -> int:
    """Mark road tiles; tiles carrying any POI (towns included) are left alone."""
    log = log or logger
    marked = 0
    for path in paths:
        path = [Point(*p) for p in path]
        for index, p in enumerate(path):
            tile = map_data[p.y][p.x]
            if tile.poi is not None:
                continue
            if not tile.has_path:
                tile.has_path = True
                tile.path_connections = []
                marked += 1
            tile.path_direction = calculate_path_direction(p, path)
            _store_connections(tile.path_connections, path, index)
    log.info("Marked %d tiles with roads", marked)
    return marked


# Checked in order when a river ends on a beach.
_BEACH_OUTLETS = (((0, -1), "END_NORTH"), ((1, 0), "END_EAST"), ((0, 1), "END_SOUTH"), ((-1, 0), "END_WEST"))


def _beach_outlet(map_data: WorldMap, p: Point) -> Optional[str]:
    w, h = grid_size(map_data)
    for (dx, dy), tag in _BEACH_OUTLETS:
        x, y = p.x + dx, p.y + dy
        if 0 <= x < w and 0 <= y < h and map_data[y][x].biome == WATER:
            return tag
    return None


def mark_river_tiles(map_data: WorldMap, rivers: Sequence[Path], log: Optional[logging.Logger] = None) -> int:
    """Mark river tiles; rivers run through forests and mountains but not towns."""
    log = log or logger
    marked = 0
    for river in rivers:
        river = [Point(*p) for p in river]
        last = len(river) - 1
        for index, p in enumerate(river):
            tile = map_data[p.y][p.x]
            if tile.poi == TOWN:
                continue
            if not tile.has_river:
                tile.has_river = True
                tile.river_connections = []
                marked += 1
            direction = calculate_path_direction(p, river)
            if tile.biome == BEACH and index == last:
                direction = _beach_outlet(map_data, p) or direction
            tile.river_direction = direction
            _store_connections(tile.river_connections, river, index)
    log.info("Marked %d tiles with rivers", marked)
    return marked
