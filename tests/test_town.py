import logging
from collections import Counter

import pytest

from realmgen.grid import Point
from realmgen.rng import SeededRNG
from realmgen.tiles import (
    BRIDGE, BUILDING, DIRT_PATH, FARM_FIELD, GRASS, KEEP_WALL, RIVER, STONE_PATH, TOWN_SQUARE, WALL, town_grid,
)
from realmgen.towngen.buildings import place_buildings
from realmgen.towngen.generator import TownMap, generate_town_map
from realmgen.towngen.layout import (
    SQUARE_SIDE, RiverBand, border_cells, place_city_walls, place_main_road, place_river, place_square, size_config,
)

SIZES = ("hamlet", "village", "town", "city")


def tiles_of(town):
    return [t for row in town.map_data for t in row]


def buildings(town):
    return Counter(t.building_type for t in tiles_of(town) if t.type == BUILDING)


def test_city_scenario():
    town = generate_town_map("city", "Testopolis", "south", 777)
    assert (town.width, town.height) == (20, 20)
    assert town.entry_point == Point(10, 19)
    assert town.center_point == Point(10, 10)
    assert buildings(town)["keep"] == 1
    assert town.tile(10, 3).building_type == "keep"
    for x, y in border_cells(20, 20):
        if (x, y) != (10, 19):
            assert town.tile(x, y).type == WALL
            assert not town.tile(x, y).walkable
    assert town.tile(10, 19).type != WALL


def test_city_gets_every_important_building():
    counts = buildings(generate_town_map("city", "Testopolis", "south", 777))
    for kind, n in (("temple", 1), ("market", 1), ("manor", 1), ("blacksmith", 1),
                    ("tavern", 3), ("guild", 3), ("bank", 3)):
        assert counts[kind] == n


def test_keep_moves_off_the_north_road():
    town = generate_town_map("city", "Northgate", "north", 5)
    assert town.entry_point == Point(10, 0)
    assert town.tile(10, 3).type != BUILDING
    assert town.tile(9, 3).building_type == "keep"
    assert any(t.type == KEEP_WALL and not t.walkable for t in tiles_of(town))


@pytest.mark.parametrize("size,dim", [("hamlet", 8), ("village", 12), ("town", 16), ("metropolis", 12)])
def test_sizes_have_no_walls(size, dim):
    town = generate_town_map(size, "Somewhere", "south", 31)
    assert (town.width, town.height) == (dim, dim)
    assert not any(t.type in (WALL, KEEP_WALL) for t in tiles_of(town))


def test_important_buildings_by_size():
    assert buildings(generate_town_map("hamlet", "Ashcroft", "south", 2))["barn"] == 1
    village = buildings(generate_town_map("village", "Millton", "south", 2))
    assert village["inn"] == village["shop"] == village["blacksmith"] == 1


@pytest.mark.parametrize("direction,edge", [("north", (6, 0)), ("south", (6, 11)), ("east", (11, 6)), ("west", (0, 6))])
def test_single_entry_on_edge(direction, edge):
    town = generate_town_map("village", "Millton", direction, 99)
    entries = [t for t in tiles_of(town) if t.is_entry]
    assert len(entries) == 1
    assert (entries[0].x, entries[0].y) == edge == tuple(town.entry_point)


def test_unknown_entry_means_south():
    town = generate_town_map("village", "Millton", "up", 99)
    assert town.entry_point == Point(6, 11)


def test_buildings_are_solid_and_typed():
    for size in ("hamlet", "village", "town", "city"):
        town = generate_town_map(size, "Anywhere", "east", 1234)
        for t in tiles_of(town):
            if t.type == BUILDING:
                assert not t.walkable
                assert t.building_type
                assert t.poi is None
            if t.poi in ("tree", "bush", "flowers"):
                assert t.type == GRASS


def test_house_quota():
    counts = buildings(generate_town_map("town", "Bridgeford", "south", 8))
    assert 0 < counts["house"] <= 20


def test_same_seed_same_town():
    a = generate_town_map("town", "Bridgeford", "west", 4242, has_river=True, river_direction="EAST_WEST")
    b = generate_town_map("town", "Bridgeford", "west", 4242, has_river=True, river_direction="EAST_WEST")
    assert a.to_dict() == b.to_dict()
    assert TownMap.from_dict(a.to_dict()) == a


def test_river_is_impassable():
    town = generate_town_map("village", "Riverside", "south", 50, has_river=True)
    water = [t for t in tiles_of(town) if t.type == RIVER]
    assert water
    assert not any(t.walkable for t in water)


def test_road_bridges_the_river():
    grid = town_grid(12, 12)
    band = RiverBand(horizontal=True, start=8)
    assert place_main_road(grid, Point(6, 11), "south", "village", band) == 6
    assert [grid[y][6].type for y in range(6, 12)] == ["dirt_path", "dirt_path", BRIDGE, BRIDGE, "dirt_path", "dirt_path"]
    assert grid[8][6].walkable


def test_city_road_is_two_stone_lanes():
    grid = town_grid(20, 20)
    assert place_main_road(grid, Point(19, 10), "east", "city") == 20
    assert grid[10][15].type == grid[11][15].type == "stone_path"


@pytest.mark.parametrize("river_direction", ["NORTH_SOUTH", "EAST_WEST"])
def test_square_over_river_stays_walkable(river_direction):
    for size in SIZES:
        for seed in range(20):
            town = generate_town_map(size, "Riverside", "south", seed, has_river=True, river_direction=river_direction)
            square = [t for t in tiles_of(town) if t.type == TOWN_SQUARE]
            assert square
            assert all(t.walkable for t in square)


def test_riverside_centre_row():
    town = generate_town_map("village", "Riverside", "south", 50, has_river=True, river_direction="NORTH_SOUTH")
    for x in range(5, 8):
        assert town.tile(x, 6).type == TOWN_SQUARE
        assert town.tile(x, 6).walkable


@pytest.mark.parametrize("size", SIZES)
def test_square_and_centre_feature(size):
    half = SQUARE_SIDE[size] // 2
    for seed in range(15):
        town = generate_town_map(size, "Centreville", "west", seed)
        centre = town.tile(*town.center_point)
        assert centre.type == TOWN_SQUARE
        assert centre.poi == ("fountain" if size == "city" else "well")
        square = [t for t in tiles_of(town) if t.type == TOWN_SQUARE]
        assert len(square) == (2 * half + 1) ** 2
        for t in square:
            assert max(abs(t.x - town.center_point.x), abs(t.y - town.center_point.y)) <= half


def test_farm_fields_only_outside_cities():
    planted = Counter()
    for size in SIZES:
        for seed in range(15):
            town = generate_town_map(size, "Fieldham", "south", seed)
            planted[size] += sum(1 for t in tiles_of(town) if t.type == FARM_FIELD)
    assert planted["city"] == 0
    assert planted["hamlet"] > 0
    assert planted["village"] > 0
    assert planted["town"] > 0


@pytest.mark.parametrize("size", SIZES)
@pytest.mark.parametrize("has_river", [False, True])
def test_buildings_only_on_grass(size, has_river):
    for seed in range(15):
        rng = SeededRNG(seed)
        width, height, _ = size_config(size)
        grid = town_grid(width, height)
        entry = Point(width // 2, height - 1)
        center = Point(width // 2, height // 2)
        river = place_river(grid, "EAST_WEST", rng) if has_river else None
        place_main_road(grid, entry, "south", size, river)
        place_square(grid, center, size)
        if size == "city":
            place_city_walls(grid, entry)
        paved = {(t.x, t.y) for row in grid for t in row if t.type != GRASS}

        assert place_buildings(grid, size, rng, center, logging.getLogger("test")) > 0
        for row in grid:
            for t in row:
                if t.type == BUILDING:
                    assert (t.x, t.y) not in paved


@pytest.mark.parametrize("size", SIZES)
def test_main_road_survives(size):
    for seed in range(15):
        town = generate_town_map(size, "Roadend", "south", seed, has_river=True, river_direction="EAST_WEST")
        cx, cy = town.center_point
        for y in range(cy, town.height):
            assert town.tile(cx, y).type in (DIRT_PATH, STONE_PATH, BRIDGE, TOWN_SQUARE)
