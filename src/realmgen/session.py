# src/realmgen/session.py
# Session-owned town cache. Town maps are generated on first entry and kept
# by town name; a lost or corrupt entry is rebuilt from the same derived seed.

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from .config import TUNING, Tuning
from .errors import SeedDerivationError
from .grid import Point
from .population.npc import NPC
from .population.populate import populate_town
from .rng import legacy_seed, town_seed
from .tiles import VILLAGE, WorldTile
from .towngen.generator import TownMap, generate_town_map

MISSING_SEED = "This save file is missing its World Seed and cannot be repaired."
INVALID_SEED = "Could not generate a valid town seed from this save file."


@dataclass(frozen=True)
class LegacySave:
    """What an old save still carries when it predates stored world seeds."""
    session_id: str
    timestamp: str
    hero_names: Iterable[str] = ()


def resolve_world_seed(world_seed: Union[int, str, None], legacy: Optional[LegacySave] = None) -> int:
    if world_seed is not None and world_seed != "":
        if isinstance(world_seed, bool):
            raise SeedDerivationError(INVALID_SEED)
        if isinstance(world_seed, int):
            return world_seed
        if isinstance(world_seed, float):
            if not world_seed.is_integer():
                raise SeedDerivationError(INVALID_SEED)
            return int(world_seed)
        try:
            return int(str(world_seed).strip())
        except ValueError as exc:
            raise SeedDerivationError(INVALID_SEED) from exc
    if legacy is not None:
        return legacy_seed(legacy.session_id, legacy.timestamp, legacy.hero_names)
    raise SeedDerivationError(MISSING_SEED)


def is_valid_town_map(town_map: Any) -> bool:
    if not isinstance(town_map, TownMap):
        return False
    return (
        bool(town_map.map_data)
        and town_map.width > 0
        and town_map.height > 0
        and town_map.entry_point.x >= 0
        and isinstance(town_map.town_name, str)
    )


@dataclass
class TownEntry:
    town_map: TownMap
    npcs: List[NPC]
    seed: int
    discovered_buildings: List[Point] = field(default_factory=list)


class TownMapCache:
    """Town name -> TownEntry. Entries are only added, or replaced when found corrupt."""

    def __init__(self, tuning: Tuning = TUNING, logger: Optional[logging.Logger] = None):
        self.tuning = tuning
        self.log = logger or logging.getLogger(__name__)
        self._entries: Dict[str, TownEntry] = {}

    def __contains__(self, town_name: str) -> bool:
        return town_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, town_name: str) -> Optional[TownEntry]:
        return self._entries.get(town_name)

    def add(self, entry: TownEntry) -> None:
        name = entry.town_map.town_name
        if name in self._entries:
            raise KeyError(f"town {name!r} is already cached")
        self._entries[name] = entry

    def get_or_generate(
        self,
        tile: WorldTile,
        world_seed: Union[int, str, None],
        legacy: Optional[LegacySave] = None,
    ) -> TownEntry:
        if not tile.town_name:
            raise ValueError(f"tile ({tile.x}, {tile.y}) is not a named town")

        cached = self._entries.get(tile.town_name)
        if cached is not None and is_valid_town_map(cached.town_map):
            return cached
        if cached is not None:
            self.log.warning("Cached map for %s is corrupt; regenerating", tile.town_name)

        seed = town_seed(resolve_world_seed(world_seed, legacy), tile.x, tile.y)
        town_map = generate_town_map(
            tile.town_size or VILLAGE,
            tile.town_name,
            self.tuning.entry_direction,
            seed,
            has_river=bool(tile.has_river),
            river_direction=tile.river_direction or "NORTH_SOUTH",
            logger=self.log,
        )
        npcs = populate_town(town_map, seed, logger=self.log, no_evil=self.tuning.no_evil)
        entry = TownEntry(town_map, npcs, seed)
        if cached is not None:
            entry.discovered_buildings = list(cached.discovered_buildings)
        self._entries[tile.town_name] = entry
        return entry

    def mark_building_discovered(self, town_name: str, x: int, y: int) -> bool:
        """Record a discovered building. False if unknown town or already recorded."""
        entry = self._entries.get(town_name)
        if entry is None:
            return False
        p = Point(x, y)
        if p in entry.discovered_buildings:
            return False
        entry.discovered_buildings.append(p)
        return True
