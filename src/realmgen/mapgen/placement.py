# src/realmgen/mapgen/placement.py
# Town placement, quadrant balancing and the cave helper.

import logging
from typing import List, Optional, Sequence

from ..grid import Point, grid_size, iter_cells, manhattan
from ..pathfinding import WorldMap
from ..rng import SeededRNG
from ..tiles import CAVE_ENTRANCE, FOREST, MOUNTAIN, PLAINS, TOWN
from .terrain import GROWTH_DIRS, is_valid_placement

logger = logging.getLogger(__name__)

TOWN_DESCRIPTIONS = (
    "A trading post",
    "A farming hamlet",
    "A riverside settlement",
    "A crossroads inn",
)
MIN_TOWN_DISTANCE = 3
TOWN_ATTEMPTS = 30

MIN_FEATURES_PER_QUADRANT = 3
BALANCE_FEATURES = (FOREST, MOUNTAIN)
FEATURE_DESCRIPTIONS = {FOREST: "Dense woods", MOUNTAIN: "Rocky peaks"}


# ---------- Towns ----------

def too_close_to_towns(x: int, y: int, towns: Sequence[Point], min_distance: int = MIN_TOWN_DISTANCE) -> bool:
    return any(manhattan((x, y), t) < min_distance for t in towns)


def place_town(map_data: WorldMap, rng: SeededRNG, towns: Sequence[Point], log: logging.Logger) -> Optional[Point]:
    w, h = grid_size(map_data)
    for _ in range(TOWN_ATTEMPTS):
        x = 1 + rng.below(w - 2)
        y = 1 + rng.below(h - 2)
        if not is_valid_placement(map_data, x, y):
            continue
        if too_close_to_towns(x, y, towns):
            continue
        tile = map_data[y][x]
        tile.poi = TOWN
        tile.description_seed = rng.pick(TOWN_DESCRIPTIONS)
        log.debug("Placed town at (%d,%d): %r", x, y, tile.description_seed)
        return Point(x, y)

    log.warning("Failed to place town after %d attempts", TOWN_ATTEMPTS)
    return None


def place_towns(map_data: WorldMap, rng: SeededRNG, log: logging.Logger) -> List[Point]:
    wanted = 2 + rng.below(3)
    log.info("Placing %d towns", wanted)
    towns: List[Point] = []
    for _ in range(wanted):
        pos = place_town(map_data, rng, towns, log)
        if pos is not None:
            towns.append(pos)
    return towns


# ---------- Balancing ----------

def quadrants(width: int, height: int):
    """(name, x0, x1, y0, y1) for the four non-overlapping quadrants."""
    mx, my = width // 2, height // 2
    return (
        ("top-left", 0, mx, 0, my),
        ("top-right", mx, width, 0, my),
        ("bottom-left", 0, mx, my, height),
        ("bottom-right", mx, width, my, height),
    )


def analyze_quadrant(map_data: WorldMap, x0: int, x1: int, y0: int, y1: int):
    features = 0
    plains: List[Point] = []
    for y in range(y0, y1):
        for x in range(x0, x1):
            tile = map_data[y][x]
            if tile.poi is not None:
                features += 1
            elif tile.biome == PLAINS:
                plains.append(Point(x, y))
    return features, plains


def improve_distribution(map_data: WorldMap, rng: SeededRNG, log: logging.Logger) -> int:
    """Top up sparse quadrants with forest/mountain tiles. Returns tiles added."""
    w, h = grid_size(map_data)
    added = 0
    for name, x0, x1, y0, y1 in quadrants(w, h):
        features, plains = analyze_quadrant(map_data, x0, x1, y0, y1)
        log.debug("%s quadrant: %d features, %d plains tiles", name, features, len(plains))
        needed = MIN_FEATURES_PER_QUADRANT - features
        if needed <= 0 or not plains:
            continue

        rng.shuffle(plains)
        for p in plains[:needed]:
            feature = rng.pick(BALANCE_FEATURES)
            tile = map_data[p.y][p.x]
            tile.poi = feature
            tile.description_seed = FEATURE_DESCRIPTIONS[feature]
            added += 1
            log.debug("Placed %s at (%d,%d)", feature, p.x, p.y)
    return added


# ---------- Caves ----------

def place_cave(map_data: WorldMap, rng: SeededRNG, log: Optional[logging.Logger] = None) -> Optional[Point]:
    """Put a cave entrance beside a random mountain. Not part of the default passes."""
    log = log or logger
    mountains = [Point(t.x, t.y) for t in iter_cells(map_data) if t.poi == MOUNTAIN]
    if not mountains:
        return None

    mountain = rng.pick(mountains)
    for dx, dy in GROWTH_DIRS:
        x, y = mountain.x + dx, mountain.y + dy
        if is_valid_placement(map_data, x, y, allow_beach=False):
            tile = map_data[y][x]
            tile.poi = CAVE_ENTRANCE
            tile.description_seed = "A dark cave entrance"
            log.debug("Placed cave entrance at (%d,%d)", x, y)
            return Point(x, y)

    log.debug("No room for a cave beside (%d,%d)", mountain.x, mountain.y)
    return None
