"""
Text tile maps.

A map is a plain text grid, one character per tile:

    #######
    #..~~.#
    #.....#
    #######

'#' is solid, '~' is an encounter zone, '@' marks where the player
starts (drawn as floor) and every other character is decoration.
Row 0 is the top of the map; tile (col, row) is centred at
(col * tile_size, row * tile_size) in world space.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from engine.graphics.ascii import AsciiRenderer, WHITE
from ascii_rpg.components import TileCollider, EncounterZone


logger = logging.getLogger(__name__)

SOLID = "#"
ENCOUNTER = "~"
SPAWN = "@"
FLOOR = "."

MAP_Z = 0.0


@dataclass
class TileMap:
    """
    Parsed map grid.

    Attributes:
        rows: One string per map row, trailing newlines stripped
        solid: (col, row) cells that block movement
        encounters: (col, row) cells that can start a battle
        spawn: (col, row) of the player start, if the map marks one
    """
    rows: list[str]
    solid: set[tuple[int, int]] = field(default_factory=set)
    encounters: set[tuple[int, int]] = field(default_factory=set)
    spawn: tuple[int, int] | None = None

    @property
    def width(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    @property
    def height(self) -> int:
        return len(self.rows)

    def cell(self, col: int, row: int) -> str:
        """Character at a cell, or a space outside the grid."""
        if 0 <= row < len(self.rows) and 0 <= col < len(self.rows[row]):
            return self.rows[row][col]
        return " "

    def cells(self):
        """Iterate (col, row, char) over every character in the grid."""
        for row, line in enumerate(self.rows):
            for col, char in enumerate(line):
                yield col, row, char


def parse_map(text: str) -> TileMap:
    """Parse map text into a TileMap."""
    tile_map = TileMap(rows=text.splitlines())
    for col, row, char in tile_map.cells():
        if char == SOLID:
            tile_map.solid.add((col, row))
        elif char == ENCOUNTER:
            tile_map.encounters.add((col, row))
        elif char == SPAWN and tile_map.spawn is None:
            tile_map.spawn = (col, row)
    return tile_map


def load_map(path: Path | str) -> TileMap:
    """
    Load and parse a map file.

    Raises:
        FileNotFoundError: If the map file does not exist
    """
    map_file = Path(path)
    if not map_file.exists():
        raise FileNotFoundError(f"No map file found: {map_file}")

    tile_map = parse_map(map_file.read_text(encoding="utf-8"))
    logger.info(
        "Loaded map %s (%dx%d, %d solid, %d encounter tiles)",
        map_file, tile_map.width, tile_map.height,
        len(tile_map.solid), len(tile_map.encounters),
    )
    return tile_map


def spawn_map(tile_map: TileMap, renderer: AsciiRenderer) -> list[int]:
    """
    Spawn one glyph entity per map character.

    Solid tiles get a TileCollider and encounter tiles an
    EncounterZone, so the overworld systems find them by component.

    Returns:
        Entity ids of the spawned tiles
    """
    size = renderer.tile_size
    tiles = []
    for col, row, char in tile_map.cells():
        glyph = FLOOR if char == SPAWN else char
        tile_id = renderer.spawn_sprite(ord(glyph), WHITE, (col * size, row * size, MAP_Z))
        tile = renderer.world.get_entity(tile_id)
        if char == SOLID:
            tile.add(TileCollider())
        elif char == ENCOUNTER:
            tile.add(EncounterZone())
        tiles.append(tile_id)
    return tiles
