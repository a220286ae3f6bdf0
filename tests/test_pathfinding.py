from realmgen.grid import Point, manhattan
from realmgen.pathfinding import (
    calculate_path_direction,
    find_nearest_towns,
    find_path,
    generate_town_paths,
    mark_path_tiles,
    mark_river_tiles,
)
from realmgen.tiles import BEACH, MOUNTAIN, TOWN, WATER, world_grid


def test_path_endpoints_and_steps():
    grid = world_grid(5, 5)
    path = find_path(grid, (0, 0), (4, 4))
    assert path[0] == Point(0, 0)
    assert path[-1] == Point(4, 4)
    assert len(path) == 9
    for a, b in zip(path, path[1:]):
        assert manhattan(a, b) == 1


def test_path_goes_around_mountain():
    grid = world_grid(5, 3)
    grid[0][2].poi = MOUNTAIN
    path = find_path(grid, (0, 0), (4, 0))
    assert Point(2, 0) not in path
    assert len(path) == 7


def test_no_path_from_water_or_out_of_bounds():
    grid = world_grid(4, 4)
    for row in grid:
        for t in row:
            t.biome = WATER
    assert find_path(grid, (0, 0), (3, 3)) is None
    assert find_path(world_grid(4, 4), (0, 0), (9, 9)) is None
    assert find_path([], (0, 0), (0, 0)) is None


def test_direction_tags():
    path = [Point(0, 0), Point(1, 0), Point(1, 1)]
    assert calculate_path_direction((0, 0), path) == "START_EAST"
    assert calculate_path_direction((1, 0), path) == "SOUTH_WEST"
    assert calculate_path_direction((1, 1), path) == "END_NORTH"
    assert calculate_path_direction((5, 5), path) == "NONE"
    straight = [Point(0, 0), Point(0, 1), Point(0, 2)]
    assert calculate_path_direction((0, 1), straight) == "NORTH_SOUTH"


def test_nearest_towns():
    towns = [(0, 0), (5, 5), (1, 1), (3, 0)]
    assert find_nearest_towns((0, 0), towns, 2) == [Point(1, 1), Point(3, 0)]


def test_town_paths_dedupe_pairs():
    grid = world_grid(10, 10)
    towns = [Point(1, 1), Point(8, 1), Point(1, 8)]
    paths = generate_town_paths(grid, towns)
    assert len(paths) == 3
    assert len(generate_town_paths(grid, towns[:2])) == 1


def test_mark_path_tiles_skips_towns():
    grid = world_grid(4, 4)
    grid[0][0].poi = TOWN
    grid[0][3].poi = TOWN
    path = find_path(grid, (0, 0), (3, 0))
    assert mark_path_tiles(grid, [path]) == 2
    assert grid[0][0].has_path is None
    assert grid[0][1].has_path is True
    assert grid[0][1].path_direction == "EAST_WEST"
    assert grid[0][1].path_connections == ["west", "east"]


def test_river_ending_on_beach_points_at_sea():
    grid = world_grid(4, 4)
    grid[0][2].biome = BEACH
    grid[0][3].biome = WATER
    river = [Point(0, 0), Point(1, 0), Point(2, 0)]
    assert mark_river_tiles(grid, [river]) == 3
    assert grid[0][2].river_direction == "END_EAST"
    assert grid[0][0].river_direction == "START_EAST"
    assert grid[0][1].river_connections == ["west", "east"]


def test_plain_tuple_paths():
    grid = world_grid(4, 4)
    assert mark_path_tiles(grid, [[(0, 1), (1, 1), (1, 2)]]) == 3
    assert grid[1][1].path_connections == ["west", "south"]
    assert mark_river_tiles(grid, [[(3, 0), (3, 1), (3, 2)]]) == 3
    assert grid[1][3].river_direction == "NORTH_SOUTH"
