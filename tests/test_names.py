from realmgen.names import (
    BLACKSMITH_NAMES,
    BUILDING_NAMERS,
    HISTORICAL_SUFFIXES,
    MOUNTAIN_SUFFIXES,
    TOWN_PREFIXES,
    generate_blacksmith_name,
    generate_mountain_name,
    generate_shop_name,
    generate_town_name,
    generate_unique_town_names,
)
from realmgen.rng import SeededRNG


def test_town_name_is_deterministic():
    assert generate_town_name("city", "plains", SeededRNG(11)) == generate_town_name("city", "plains", SeededRNG(11))


def test_hamlet_without_regional_names():
    # beach has no regional table, hamlets get no grand/noble roll
    for seed in range(30):
        name = generate_town_name("hamlet", "beach", SeededRNG(seed))
        assert any(name.startswith(p) for p in TOWN_PREFIXES)
        assert any(name.endswith(s) for s in HISTORICAL_SUFFIXES["hamlet"])


def test_unique_town_names():
    names = generate_unique_town_names(5, "forest", ["city", "town", "village", "hamlet"], SeededRNG(3))
    assert 0 < len(names) <= 5
    assert len(set(names)) == len(names)


def test_building_names():
    for seed in range(20):
        shop = generate_shop_name(SeededRNG(seed))
        assert shop.startswith("The ") or "'s " in shop
        assert generate_blacksmith_name(SeededRNG(seed)) in BLACKSMITH_NAMES
        assert generate_mountain_name(SeededRNG(seed)).split(" ")[-1] in {s.split(" ")[-1] for s in MOUNTAIN_SUFFIXES}


def test_houses_and_barns_are_unnamed():
    assert "house" not in BUILDING_NAMERS
    assert "barn" not in BUILDING_NAMERS
    for kind in ("tavern", "inn", "shop", "temple", "guild", "bank", "manor", "keep", "blacksmith", "market"):
        assert isinstance(BUILDING_NAMERS[kind](SeededRNG(1)), str)
