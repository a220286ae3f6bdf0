# src/realmgen/tiles.py
# Tile records for the world and town maps.
# Factories validate enumerated fields; plain attribute writes during
# generation are trusted. to_dict/from_dict use the persisted camelCase keys.

from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional, Tuple

from .errors import TileError

# World
PLAINS, WATER, BEACH = "plains", "water", "beach"
BIOMES = (PLAINS, WATER, BEACH)

FOREST, MOUNTAIN, TOWN, CAVE_ENTRANCE = "forest", "mountain", "town", "cave_entrance"
WORLD_POIS = (FOREST, MOUNTAIN, TOWN, CAVE_ENTRANCE)

HAMLET, VILLAGE, TOWN_SIZE, CITY = "hamlet", "village", "town", "city"
TOWN_SIZES = (HAMLET, VILLAGE, TOWN_SIZE, CITY)

# Town interior
GRASS = "grass"
DIRT_PATH = "dirt_path"
STONE_PATH = "stone_path"
TOWN_SQUARE = "town_square"
BUILDING = "building"
WALL = "wall"
KEEP_WALL = "keep_wall"
RIVER = "water"
BRIDGE = "bridge"
FARM_FIELD = "farm_field"
TOWN_TILE_TYPES = (
    GRASS, DIRT_PATH, STONE_PATH, TOWN_SQUARE, BUILDING,
    WALL, KEEP_WALL, RIVER, BRIDGE, FARM_FIELD,
)
ROAD_TYPES = (DIRT_PATH, STONE_PATH)

TOWN_POIS = ("well", "fountain", "tree", "bush", "flowers")

BUILDING_TYPES = (
    "house", "inn", "shop", "temple", "tavern", "guild", "market",
    "bank", "manor", "barn", "blacksmith", "keep",
)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _check_coords(x: Any, y: Any) -> None:
    if not isinstance(x, int) or not isinstance(y, int) or isinstance(x, bool) or isinstance(y, bool):
        raise TileError(f"tile coordinates must be ints, got ({x!r}, {y!r})")
    if x < 0 or y < 0:
        raise TileError(f"tile coordinates must be non-negative, got ({x}, {y})")


def _check_choice(label: str, value: Any, allowed: Tuple[str, ...], nullable: bool = False) -> None:
    if value is None and nullable:
        return
    if value not in allowed:
        raise TileError(f"unknown {label} {value!r}; expected one of {', '.join(allowed)}")


class _Record:
    # Members that are always serialized, even when None.
    _required: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None and f.name not in self._required:
                continue
            if isinstance(value, list):
                value = list(value)
            out[_camel(f.name)] = value
        return out

    @classmethod
    def _kwargs_from_dict(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        by_key = {_camel(f.name): f.name for f in fields(cls)}
        return {by_key[k]: v for k, v in data.items() if k in by_key}


@dataclass
class WorldTile(_Record):
    x: int
    y: int
    biome: str = PLAINS
    poi: Optional[str] = None
    description_seed: str = "Open fields"
    is_explored: bool = False
    is_starting_town: Optional[bool] = None
    town_name: Optional[str] = None
    town_size: Optional[str] = None
    mountain_name: Optional[str] = None
    is_first_mountain_in_range: Optional[bool] = None
    has_path: Optional[bool] = None
    path_direction: Optional[str] = None
    path_connections: Optional[List[str]] = None
    has_river: Optional[bool] = None
    river_direction: Optional[str] = None
    river_connections: Optional[List[str]] = None
    beach_direction: Optional[int] = None
    is_lake: Optional[bool] = None

    _required = ("x", "y", "biome", "poi", "description_seed", "is_explored")

    @classmethod
    def create(cls, x: int, y: int, biome: str = PLAINS, poi: Optional[str] = None, **kwargs: Any) -> "WorldTile":
        _check_coords(x, y)
        _check_choice("biome", biome, BIOMES)
        _check_choice("poi", poi, WORLD_POIS, nullable=True)
        town_size = kwargs.get("town_size")
        if town_size is not None and not isinstance(town_size, str):
            raise TileError(f"town_size must be a string, got {town_size!r}")
        return cls(x=x, y=y, biome=biome, poi=poi, **kwargs)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorldTile":
        return cls.create(**cls._kwargs_from_dict(data))


@dataclass
class TownTile(_Record):
    x: int
    y: int
    type: str = GRASS
    poi: Optional[str] = None
    walkable: bool = True
    is_explored: bool = False
    building_type: Optional[str] = None
    building_name: Optional[str] = None
    is_entry: Optional[bool] = None

    _required = ("x", "y", "type", "poi", "walkable", "is_explored")

    @classmethod
    def create(cls, x: int, y: int, type: str = GRASS, poi: Optional[str] = None, **kwargs: Any) -> "TownTile":
        _check_coords(x, y)
        _check_choice("town tile type", type, TOWN_TILE_TYPES)
        _check_choice("town poi", poi, TOWN_POIS, nullable=True)
        _check_choice("building type", kwargs.get("building_type"), BUILDING_TYPES, nullable=True)
        tile = cls(x=x, y=y, type=type, poi=poi, **kwargs)
        if tile.type == BUILDING and tile.walkable:
            raise TileError(f"building tile at ({x}, {y}) cannot be walkable")
        return tile

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TownTile":
        return cls.create(**cls._kwargs_from_dict(data))


def world_grid(width: int, height: int) -> List[List[WorldTile]]:
    return [[WorldTile.create(x, y) for x in range(width)] for y in range(height)]


def town_grid(width: int, height: int) -> List[List[TownTile]]:
    return [[TownTile.create(x, y) for x in range(width)] for y in range(height)]


def grid_to_dicts(grid: List[List[_Record]]) -> List[List[Dict[str, Any]]]:
    return [[tile.to_dict() for tile in row] for row in grid]


def world_from_dicts(rows: List[List[Dict[str, Any]]]) -> List[List[WorldTile]]:
    grid = [[WorldTile.from_dict(d) for d in row] for row in rows]
    _check_positions(grid)
    return grid


def town_from_dicts(rows: List[List[Dict[str, Any]]]) -> List[List[TownTile]]:
    grid = [[TownTile.from_dict(d) for d in row] for row in rows]
    _check_positions(grid)
    return grid


def _check_positions(grid: List[List[Any]]) -> None:
    for y, row in enumerate(grid):
        for x, tile in enumerate(row):
            if (tile.x, tile.y) != (x, y):
                raise TileError(f"tile stored at ({x}, {y}) claims ({tile.x}, {tile.y})")
