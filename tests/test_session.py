import pytest

from realmgen.errors import SeedDerivationError
from realmgen.grid import Point
from realmgen.rng import legacy_seed
from realmgen.session import (
    INVALID_SEED,
    MISSING_SEED,
    LegacySave,
    TownEntry,
    TownMapCache,
    is_valid_town_map,
    resolve_world_seed,
)
from realmgen.tiles import TOWN, WorldTile
from realmgen.towngen.generator import TownMap


def oakford():
    return WorldTile.create(3, 4, "plains", TOWN, town_name="Oakford", town_size="village")


def test_resolve_world_seed():
    assert resolve_world_seed(5) == 5
    assert resolve_world_seed("42") == 42
    assert resolve_world_seed(3.0) == 3
    save = LegacySave("abc", "2024-05-01", ["Tessa", "Bram"])
    assert resolve_world_seed(None, save) == legacy_seed("abc", "2024-05-01", ["Bram", "Tessa"])
    assert resolve_world_seed("", save) == resolve_world_seed(None, save)


@pytest.mark.parametrize("bad", ["abc", 3.5, True])
def test_unusable_seed(bad):
    with pytest.raises(SeedDerivationError, match=INVALID_SEED):
        resolve_world_seed(bad)


def test_missing_seed():
    with pytest.raises(SeedDerivationError) as exc:
        resolve_world_seed(None)
    assert str(exc.value) == MISSING_SEED


def test_generate_once_then_cached():
    cache = TownMapCache()
    entry = cache.get_or_generate(oakford(), 100)
    assert entry.seed == 100 + 3 * 1000 + 4 * 10000
    assert entry.town_map.town_name == "Oakford"
    assert entry.town_map.entry_point == Point(6, 11)
    assert entry.npcs
    assert cache.get_or_generate(oakford(), 100) is entry
    assert "Oakford" in cache
    assert len(cache) == 1


def test_lost_cache_rebuilds_the_same_town():
    a = TownMapCache().get_or_generate(oakford(), "100")
    b = TownMapCache().get_or_generate(oakford(), 100)
    assert a.town_map.to_dict() == b.town_map.to_dict()
    assert [n.to_dict() for n in a.npcs] == [n.to_dict() for n in b.npcs]


def test_corrupt_entry_is_replaced():
    cache = TownMapCache()
    broken = TownMap([], 0, 0, "Oakford", "village", Point(0, 0), Point(0, 0))
    assert not is_valid_town_map(broken)
    cache.add(TownEntry(broken, [], 1, [Point(2, 2)]))
    entry = cache.get_or_generate(oakford(), 100)
    assert is_valid_town_map(entry.town_map)
    assert entry.discovered_buildings == [Point(2, 2)]
    assert cache.get("Oakford") is entry


def test_cache_is_append_only():
    cache = TownMapCache()
    entry = cache.get_or_generate(oakford(), 100)
    with pytest.raises(KeyError):
        cache.add(entry)


def test_discovered_buildings():
    cache = TownMapCache()
    cache.get_or_generate(oakford(), 100)
    assert cache.mark_building_discovered("Oakford", 4, 5) is True
    assert cache.mark_building_discovered("Oakford", 4, 5) is False
    assert cache.mark_building_discovered("Nowhere", 4, 5) is False
    assert cache.get("Oakford").discovered_buildings == [Point(4, 5)]


def test_untowned_tile_and_missing_seed():
    cache = TownMapCache()
    with pytest.raises(ValueError):
        cache.get_or_generate(WorldTile.create(0, 0), 1)
    with pytest.raises(SeedDerivationError):
        cache.get_or_generate(oakford(), None)
    assert len(cache) == 0
