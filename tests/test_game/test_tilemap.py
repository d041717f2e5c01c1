from pathlib import Path

import pytest

from engine.graphics.ascii import AsciiRenderer, Glyph
from ascii_rpg.components import EncounterZone, TileCollider, Transform
from ascii_rpg.world import load_map, parse_map, spawn_map

MAP_TEXT = """\
#####
#@.~#
#.~~#
#####
"""

ASSET_MAP = Path(__file__).resolve().parents[2] / "assets" / "map.txt"


def test_parse_map():
    tile_map = parse_map(MAP_TEXT)

    assert (tile_map.width, tile_map.height) == (5, 4)
    assert tile_map.spawn == (1, 1)
    assert tile_map.encounters == {(3, 1), (2, 2), (3, 2)}
    assert (0, 0) in tile_map.solid
    assert len(tile_map.solid) == 14


def test_cell_outside_grid_is_blank():
    tile_map = parse_map(MAP_TEXT)

    assert tile_map.cell(3, 1) == "~"
    assert tile_map.cell(10, 10) == " "
    assert tile_map.cell(-1, 0) == " "


def test_map_without_spawn():
    assert parse_map("...\n.~.").spawn is None


def test_spawn_map_components(world, tuning):
    renderer = AsciiRenderer(world, tuning.tile_size)
    tiles = spawn_map(parse_map(MAP_TEXT), renderer)

    assert len(tiles) == 20
    assert len(list(world.get_entities_with(TileCollider))) == 14
    zones = world.get_entities_with(EncounterZone, Transform)
    assert sorted(z.get(Transform).position for z in zones) == [(64, 64), (96, 32), (96, 64)]


def test_spawn_point_drawn_as_floor(world, tuning):
    renderer = AsciiRenderer(world, tuning.tile_size)
    tiles = spawn_map(parse_map(MAP_TEXT), renderer)

    spawn_tile = world.get_entity(tiles[6])
    assert spawn_tile.get(Transform).position == (32, 32)
    assert spawn_tile.get(Glyph).index == ord(".")


def test_load_map(tmp_path, caplog):
    path = tmp_path / "level.txt"
    path.write_text(MAP_TEXT, encoding="utf-8")

    with caplog.at_level("INFO"):
        tile_map = load_map(path)

    assert tile_map.spawn == (1, 1)
    assert "Loaded map" in caplog.text


def test_load_missing_map(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_map(tmp_path / "nope.txt")


def test_bundled_map_is_playable():
    tile_map = load_map(ASSET_MAP)

    assert tile_map.spawn is not None
    assert tile_map.spawn not in tile_map.solid
    assert tile_map.encounters
