import logging

import pytest

from realmgen.errors import WorldGenerationError
from realmgen.grid import Point
from realmgen.mapgen.generator import find_starting_town, generate_map_data, get_tile
from realmgen.mapgen.naming import SIZE_ORDER, find_mountain_clusters, normalize_custom_names
from realmgen.mapgen.placement import improve_distribution, place_cave, quadrants
from realmgen.mapgen.terrain import place_coast
from realmgen.rng import SeededRNG
from realmgen.tiles import BEACH, CAVE_ENTRANCE, FOREST, MOUNTAIN, TOWN, WATER, grid_to_dicts, world_grid


def towns_of(map_data):
    return [t for row in map_data for t in row if t.poi == TOWN]


def test_same_seed_same_world():
    a = generate_map_data(10, 10, 4242)
    b = generate_map_data(10, 10, 4242)
    assert grid_to_dicts(a) == grid_to_dicts(b)


def test_different_seeds_differ():
    assert grid_to_dicts(generate_map_data(10, 10, 1)) != grid_to_dicts(generate_map_data(10, 10, 2))


def test_shape_and_starting_town():
    m = generate_map_data(12, 9, 9001)
    assert len(m) == 9
    assert all(len(row) == 12 for row in m)
    for y, row in enumerate(m):
        for x, t in enumerate(row):
            assert (t.x, t.y) == (x, y)
    starts = [t for row in m for t in row if t.is_starting_town]
    assert len(starts) == 1
    assert starts[0].poi == TOWN
    assert find_starting_town(m) == Point(starts[0].x, starts[0].y)


def test_towns_are_sized_and_named():
    for seed in (3, 17, 4242):
        m = generate_map_data(10, 10, seed)
        towns = towns_of(m)
        assert 1 <= len(towns) <= 4
        for t in towns:
            assert t.town_name
            assert t.town_size in SIZE_ORDER
            assert t.biome != WATER


def test_custom_town_names_go_to_biggest_towns_first():
    custom = ["Alpha", "Beta", "Gamma", "Delta", "Epsilon"]
    m = generate_map_data(10, 10, 4242, custom_names={"towns": custom})
    towns = towns_of(m)
    assert {t.town_name for t in towns} <= set(custom)
    ranked = sorted(towns, key=lambda t: (SIZE_ORDER[t.town_size], t.y, t.x))
    assert ranked[0].town_name == "Alpha"


def test_custom_names_input():
    assert normalize_custom_names(["A", "B"]).towns == ["A", "B"]
    assert normalize_custom_names({"mountains": ["Spine"]}).mountains == ["Spine"]
    with pytest.raises(TypeError):
        normalize_custom_names("Alpha")


def test_mountain_clusters_share_one_name():
    m = generate_map_data(10, 10, 77, custom_names={"mountains": ["Spine of Test"]})
    clusters = find_mountain_clusters(m)
    assert clusters
    assert clusters[0][0].mountain_name == "Spine of Test"
    for cluster in clusters:
        names = {t.mountain_name for t in cluster}
        assert len(names) == 1
        assert [t.is_first_mountain_in_range for t in cluster].count(True) == 1
        assert cluster[0].description_seed == f"The {cluster[0].mountain_name}"


def test_rivers_and_roads_are_tagged():
    for seed in (5, 123, 9001):
        m = generate_map_data(10, 10, seed)
        for row in m:
            for t in row:
                if t.has_river:
                    assert t.river_direction
                if t.has_path:
                    assert t.poi is None
                    assert t.path_direction


def test_too_small():
    with pytest.raises(ValueError):
        generate_map_data(3, 10, 1)


def test_unseeded_world_is_valid():
    m = generate_map_data(8, 8)
    assert towns_of(m)


def test_get_tile():
    m = world_grid(4, 4)
    assert get_tile(m, 1, 2) is m[2][1]
    assert get_tile(m, 4, 0) is None


def test_starting_town_fallbacks():
    m = world_grid(5, 5)
    with pytest.raises(WorldGenerationError):
        find_starting_town(m)
    m[3][1].poi = TOWN
    assert find_starting_town(m) == Point(1, 3)
    m[2][2].poi = TOWN
    m[2][2].description_seed = "A small village"
    assert find_starting_town(m) == Point(2, 2)


def test_coast_band():
    m = world_grid(6, 8)
    edge = place_coast(m, SeededRNG(12))
    beaches = [t for row in m for t in row if t.biome == BEACH]
    assert beaches
    assert all(t.beach_direction == edge for t in beaches)
    assert len(beaches) == (6 if edge in (0, 2) else 8)


def test_balancing_fills_empty_quadrants():
    m = world_grid(10, 10)
    assert improve_distribution(m, SeededRNG(1), logging.getLogger("test")) == 12
    for _name, x0, x1, y0, y1 in quadrants(10, 10):
        pois = [m[y][x].poi for y in range(y0, y1) for x in range(x0, x1) if m[y][x].poi]
        assert len(pois) == 3


def test_cave_beside_mountain():
    m = world_grid(5, 5)
    assert place_cave(m, SeededRNG(1)) is None
    m[2][2].poi = MOUNTAIN
    assert place_cave(m, SeededRNG(1)) == Point(3, 2)
    assert m[2][3].poi == CAVE_ENTRANCE

def test_natural_features_appear():
    lakes = 0
    for seed in range(20):
        m = generate_map_data(10, 10, seed)
        cells = [t for row in m for t in row]
        assert any(t.poi == FOREST for t in cells)
        assert any(t.poi == MOUNTAIN for t in cells)
        for t in cells:
            if t.is_lake:
                assert t.biome == WATER
                assert t.description_seed == "A clear lake"
                lakes += 1
    assert lakes > 0
