# src/realmgen/towngen/generator.py
# Town interior generator. Steps run in a fixed order: each one sees the
# tiles carved by the steps before it.

import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..grid import Point
from ..rng import M, SeededRNG
from ..tiles import CITY, grid_to_dicts, town_from_dicts, town_grid
from .buildings import place_buildings
from .layout import ENTRY_DIRECTIONS, TownGrid, entry_position, place_city_walls, place_main_road, place_river, place_square, size_config
from .paths import generate_building_paths
from .scatter import has_farms, place_decorations, place_farm_fields


@dataclass(frozen=True)
class TownMap:
    map_data: TownGrid
    width: int
    height: int
    town_name: str
    town_size: str
    entry_point: Point
    center_point: Point

    def tile(self, x: int, y: int):
        return self.map_data[y][x]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mapData": grid_to_dicts(self.map_data),
            "width": self.width,
            "height": self.height,
            "townName": self.town_name,
            "townSize": self.town_size,
            "entryPoint": {"x": self.entry_point.x, "y": self.entry_point.y},
            "centerPoint": {"x": self.center_point.x, "y": self.center_point.y},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TownMap":
        return cls(
            map_data=town_from_dicts(data["mapData"]),
            width=int(data["width"]),
            height=int(data["height"]),
            town_name=data["townName"],
            town_size=data["townSize"],
            entry_point=Point(data["entryPoint"]["x"], data["entryPoint"]["y"]),
            center_point=Point(data["centerPoint"]["x"], data["centerPoint"]["y"]),
        )


def generate_town_map(
    town_size: str,
    town_name: str,
    entry_direction: str = "south",
    seed: Optional[int] = None,
    has_river: bool = False,
    river_direction: str = "NORTH_SOUTH",
    logger: Optional[logging.Logger] = None,
) -> TownMap:
    log = logger or logging.getLogger(__name__)
    if seed is None:
        seed = random.randrange(M)
        log.info("No town seed given for %s; using %d", town_name, seed)

    if entry_direction not in ENTRY_DIRECTIONS:
        log.debug("Unknown entry direction %r; entering from the south", entry_direction)
        entry_direction = "south"

    width, height, _buildings = size_config(town_size)
    log.info("Generating %s map for %s (%dx%d, seed %d)", town_size, town_name, width, height, seed)
    rng = SeededRNG(seed)
    grid = town_grid(width, height)

    entry = entry_position(width, height, entry_direction)
    river = place_river(grid, river_direction, rng) if has_river else None
    place_main_road(grid, entry, entry_direction, town_size, river)

    center = Point(width // 2, height // 2)
    place_square(grid, center, town_size)
    if town_size == CITY:
        walls = place_city_walls(grid, entry)
        log.debug("Placed %d wall tiles", walls)

    count = place_buildings(grid, town_size, rng, center, log)
    log.debug("Placed %d buildings", count)
    generate_building_paths(grid, center, rng, log)

    if has_farms(town_size):
        place_farm_fields(grid, town_size, rng, log)
    place_decorations(grid, town_size, rng)

    grid[entry.y][entry.x].is_entry = True

    return TownMap(
        map_data=grid,
        width=width,
        height=height,
        town_name=town_name,
        town_size=town_size,
        entry_point=entry,
        center_point=center,
    )
