# src/realmgen/mapgen/generator.py
# Overworld generator: natural features, towns, roads, mountain names.

import logging
import random
from typing import Optional

from ..errors import WorldGenerationError
from ..grid import Point, cell_at
from ..pathfinding import WorldMap, generate_town_paths, mark_path_tiles
from ..rng import M, SeededRNG
from ..tiles import TOWN, WorldTile, world_grid
from .naming import CustomNamesInput, find_town_tile, harmonize_mountain_names, name_towns, normalize_custom_names
from .placement import improve_distribution, place_towns
from .terrain import place_natural_features

logger = logging.getLogger(__name__)

MIN_SIZE = 4


def generate_map_data(
    width: int = 10,
    height: int = 10,
    seed: Optional[int] = None,
    custom_names: CustomNamesInput = None,
    logger: Optional[logging.Logger] = None,
) -> WorldMap:
    """
    Build a width x height overworld. The same seed always yields the same map.
    With no seed a fresh one is drawn and logged so the map can be rebuilt.
    """
    log = logger or logging.getLogger(__name__)
    if width < MIN_SIZE or height < MIN_SIZE:
        raise ValueError(f"world must be at least {MIN_SIZE}x{MIN_SIZE}, got {width}x{height}")
    if seed is None:
        seed = random.randrange(M)
        log.info("No world seed given; using %d", seed)

    names = normalize_custom_names(custom_names)
    rng = SeededRNG(seed)
    map_data = world_grid(width, height)

    place_natural_features(map_data, rng, log)

    towns = place_towns(map_data, rng, log)
    improve_distribution(map_data, rng, log)
    if not towns:
        raise WorldGenerationError(f"no towns could be placed on a {width}x{height} map (seed {seed})")
    name_towns(map_data, towns, rng, names.towns, log)

    if len(towns) > 1:
        paths = generate_town_paths(map_data, towns, log)
        mark_path_tiles(map_data, paths, log)

    harmonize_mountain_names(map_data, rng, names.mountains, log)

    for t in towns:
        tile = map_data[t.y][t.x]
        log.info("  %s (%s) at (%d,%d)%s", tile.town_name, tile.town_size, t.x, t.y,
                 " STARTING TOWN" if tile.is_starting_town else "")
    return map_data


def get_tile(map_data: WorldMap, x: int, y: int) -> Optional[WorldTile]:
    tile = cell_at(map_data, x, y)
    if tile is not None:
        return tile
    logger.warning("Attempted to get invalid tile coordinates: %d, %d", x, y)
    return None


def find_starting_town(map_data: WorldMap) -> Point:
    """Flagged starting town, else the legacy "A small village", else any town."""
    pos = find_town_tile(map_data, lambda t: t.poi == TOWN and t.is_starting_town is True)
    if pos is not None:
        return pos

    logger.info("No marked starting town; looking for \"A small village\"")
    pos = find_town_tile(map_data, lambda t: t.poi == TOWN and t.description_seed == "A small village")
    if pos is not None:
        return pos

    logger.info("No starting town found; falling back to any town")
    pos = find_town_tile(map_data, lambda t: t.poi == TOWN)
    if pos is not None:
        return pos

    logger.error("No towns found on map")
    raise WorldGenerationError("No towns found on map - map generation failed")
