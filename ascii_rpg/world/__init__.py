"""Overworld - tile maps, the player and the encounter trigger."""

from ascii_rpg.world.tilemap import TileMap, parse_map, load_map, spawn_map
from ascii_rpg.world.player import create_player, PlayerMovementSystem
from ascii_rpg.world.encounter import EncounterSystem

__all__ = [
    "TileMap",
    "parse_map",
    "load_map",
    "spawn_map",
    "create_player",
    "PlayerMovementSystem",
    "EncounterSystem",
]
