# src/realmgen/mapgen/naming.py
# Starting town, town sizes and names, and mountain cluster naming.

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Union

from ..grid import Point, grid_size, iter_cells
from ..names import generate_mountain_name, generate_town_name
from ..pathfinding import WorldMap
from ..rng import SeededRNG
from ..tiles import CITY, HAMLET, MOUNTAIN, TOWN_SIZE, VILLAGE, WorldTile

SIZE_LADDER = (HAMLET, VILLAGE, TOWN_SIZE, CITY)
SIZE_ORDER = {CITY: 0, TOWN_SIZE: 1, VILLAGE: 2, HAMLET: 3}
SIZE_DESCRIPTIONS = {
    HAMLET: "A small hamlet",
    VILLAGE: "A quiet village",
    TOWN_SIZE: "A bustling town",
    CITY: "A grand city",
}


@dataclass
class CustomNames:
    towns: List[str] = field(default_factory=list)
    mountains: List[str] = field(default_factory=list)


CustomNamesInput = Union[None, Sequence[str], Mapping[str, Iterable[str]], CustomNames]


def normalize_custom_names(custom: CustomNamesInput) -> CustomNames:
    """Accept a legacy list of town names or a {"towns": [...], "mountains": [...]} mapping."""
    if custom is None:
        return CustomNames()
    if isinstance(custom, CustomNames):
        return CustomNames(list(custom.towns), list(custom.mountains))
    if isinstance(custom, Mapping):
        return CustomNames(list(custom.get("towns") or []), list(custom.get("mountains") or []))
    if isinstance(custom, str):
        raise TypeError("custom names must be a list of names, not a single string")
    return CustomNames(towns=list(custom))


# ---------- Towns ----------

def select_starting_town(map_data: WorldMap, towns: Sequence[Point], rng: SeededRNG) -> Point:
    start = towns[rng.below(len(towns))]
    map_data[start.y][start.x].is_starting_town = True
    return start


def assign_town_sizes(map_data: WorldMap, towns: Sequence[Point], rng: SeededRNG) -> None:
    sizes = list(SIZE_LADDER)
    rng.shuffle(sizes)
    for i, t in enumerate(towns):
        map_data[t.y][t.x].town_size = sizes[i % len(sizes)]


def assign_town_names(
    map_data: WorldMap,
    towns: Sequence[Point],
    rng: SeededRNG,
    custom_towns: List[str],
    log: logging.Logger,
) -> None:
    """Name towns most important first; queued custom names are consumed before generated ones."""
    ordered = sorted(towns, key=lambda t: SIZE_ORDER.get(map_data[t.y][t.x].town_size or HAMLET, 3))
    queue = deque(custom_towns)
    for t in ordered:
        tile = map_data[t.y][t.x]
        size = tile.town_size or VILLAGE
        tile.town_name = queue.popleft() if queue else generate_town_name(size, tile.biome, rng)
        tile.description_seed = SIZE_DESCRIPTIONS.get(size, "A settlement")
        log.debug("%s (%s) at (%d,%d)", tile.town_name, size, t.x, t.y)


def name_towns(
    map_data: WorldMap,
    towns: Sequence[Point],
    rng: SeededRNG,
    custom_towns: List[str],
    log: logging.Logger,
) -> Point:
    start = select_starting_town(map_data, towns, rng)
    log.info("Assigning sizes and names to %d towns (%d custom names)", len(towns), len(custom_towns))
    assign_town_sizes(map_data, towns, rng)
    assign_town_names(map_data, towns, rng, custom_towns, log)
    tile = map_data[start.y][start.x]
    log.info("Starting town: %s (%s) at (%d,%d)", tile.town_name, tile.town_size, start.x, start.y)
    return start


# ---------- Mountains ----------

def mountain_cluster(map_data: WorldMap, visited: Set[Point], origin: Point) -> List[WorldTile]:
    """BFS over 4-connected mountain tiles from *origin*, in discovery order."""
    w, h = grid_size(map_data)
    cluster: List[WorldTile] = []
    queue = deque([origin])
    visited.add(origin)
    while queue:
        p = queue.popleft()
        cluster.append(map_data[p.y][p.x])
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            n = Point(p.x + dx, p.y + dy)
            if not (0 <= n.x < w and 0 <= n.y < h) or n in visited:
                continue
            if map_data[n.y][n.x].poi == MOUNTAIN:
                visited.add(n)
                queue.append(n)
    return cluster


def find_mountain_clusters(map_data: WorldMap) -> List[List[WorldTile]]:
    visited: Set[Point] = set()
    clusters = []
    for row in map_data:
        for tile in row:
            p = Point(tile.x, tile.y)
            if tile.poi == MOUNTAIN and p not in visited:
                clusters.append(mountain_cluster(map_data, visited, p))
    return clusters


def choose_cluster_name(
    cluster: Sequence[WorldTile],
    custom_lower: Set[str],
    queue: deque,
    rng: SeededRNG,
) -> str:
    for tile in cluster:
        if tile.mountain_name and tile.mountain_name.lower() in custom_lower:
            return tile.mountain_name
    if queue:
        return queue.popleft()
    for tile in cluster:
        if tile.mountain_name:
            return tile.mountain_name
    return generate_mountain_name(rng)


def harmonize_mountain_names(
    map_data: WorldMap,
    rng: SeededRNG,
    custom_mountains: Sequence[str],
    log: logging.Logger,
) -> Dict[str, int]:
    """Give every mountain cluster a single name. Returns name -> tile count."""
    clusters = find_mountain_clusters(map_data)
    log.debug("Found %d mountain clusters", len(clusters))
    custom_lower = {n.lower() for n in custom_mountains}
    queue = deque(custom_mountains)

    named: Dict[str, int] = {}
    for cluster in clusters:
        name = choose_cluster_name(cluster, custom_lower, queue, rng)
        for j, tile in enumerate(cluster):
            tile.mountain_name = name
            tile.description_seed = f"The {name}"
            tile.is_first_mountain_in_range = j == 0
        named[name] = named.get(name, 0) + len(cluster)
        log.debug("%r (%d tiles) near (%d,%d)", name, len(cluster), cluster[0].x, cluster[0].y)
    return named


def find_town_tile(map_data: WorldMap, predicate) -> Optional[Point]:
    for tile in iter_cells(map_data):
        if predicate(tile):
            return Point(tile.x, tile.y)
    return None
