import pytest

from realmgen.errors import TileError
from realmgen.tiles import TownTile, WorldTile, grid_to_dicts, world_from_dicts, world_grid


def test_world_tile_dict_shape():
    assert WorldTile.create(1, 2).to_dict() == {
        "x": 1,
        "y": 2,
        "biome": "plains",
        "poi": None,
        "descriptionSeed": "Open fields",
        "isExplored": False,
    }


def test_world_tile_round_trip_keeps_optionals():
    t = WorldTile.create(3, 0, "plains", "town", town_name="Oakford", town_size="village",
                         has_path=True, path_connections=["west", "east"])
    d = t.to_dict()
    assert d["townName"] == "Oakford"
    assert d["pathConnections"] == ["west", "east"]
    assert WorldTile.from_dict(d) == t


def test_bad_values_rejected():
    with pytest.raises(TileError):
        WorldTile.create(0, 0, biome="lava")
    with pytest.raises(TileError):
        WorldTile.create(0, 0, poi="castle")
    with pytest.raises(ValueError):
        WorldTile.create(-1, 0)
    with pytest.raises(TileError):
        TownTile.create(0, 0, type="moat")
    with pytest.raises(TileError):
        TownTile.create(0, 0, type="building", building_type="house")  # walkable by default


def test_building_tile():
    t = TownTile.create(2, 2, type="building", walkable=False, building_type="inn", building_name="The Jolly Wizard")
    assert t.to_dict()["buildingName"] == "The Jolly Wizard"


def test_positions_checked_on_load():
    rows = grid_to_dicts(world_grid(3, 2))
    assert len(world_from_dicts(rows)) == 2
    rows[1][0]["x"] = 2
    with pytest.raises(TileError):
        world_from_dicts(rows)
