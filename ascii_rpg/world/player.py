"""
Player entity - factory and overworld movement.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from engine.core import Entity, System
from engine.graphics.ascii import AsciiRenderer
from ascii_rpg.components import (
    EncounterTracker,
    Player,
    PlayerProgression,
    StatBlock,
    TileCollider,
    Transform,
)
from ascii_rpg.world.collision import centered_box, overlaps_any

if TYPE_CHECKING:
    from engine.graphics.camera import Camera
    from engine.input.handler import InputHandler
    from ascii_rpg.config import CombatTuning


logger = logging.getLogger(__name__)

PLAYER_GLYPH = 1
PLAYER_COLOR = (0.3, 0.3, 0.9)
PLAYER_Z = 9.0


def create_player(
    renderer: AsciiRenderer,
    tuning: CombatTuning,
    x: float = 0.0,
    y: float = 0.0,
) -> Entity:
    """
    Create the player entity in the renderer's world.

    The player carries its glyph plus everything battles read and
    write: stats, experience and the encounter dwell timer.
    """
    player_id = renderer.spawn_sprite(PLAYER_GLYPH, PLAYER_COLOR, (x, y, PLAYER_Z), name="Player")
    player = renderer.world.get_entity(player_id)
    player.add_tag("player")

    base = tuning.player
    player.add(Player(speed=base.speed))
    player.add(StatBlock(
        health=base.health,
        max_health=base.health,
        attack=base.attack,
        defense=base.defense,
    ))
    player.add(PlayerProgression())
    player.add(EncounterTracker())
    return player


class PlayerMovementSystem(System):
    """
    Moves the player from the movement actions.

    Speed is in tiles per second. Each axis is checked separately
    against solid tiles with the inset hit-box, so the player slides
    along walls instead of sticking to them. The camera follows the
    player after moving.
    """

    required_components = [Player, Transform]
    priority = 10

    def __init__(self, input_handler: InputHandler, tuning: CombatTuning, camera: Camera | None = None):
        super().__init__()
        self.input = input_handler
        self.tuning = tuning
        self.camera = camera

    def process_entity(self, entity: Entity, dt: float) -> None:
        player = entity.get(Player)
        transform = entity.get(Transform)

        if player.active:
            dx, dy = self.input.get_movement_vector()

            # Normalize diagonal movement
            if dx != 0 and dy != 0:
                dx *= 0.707
                dy *= 0.707

            step = player.speed * self.tuning.tile_size * dt
            if dx and not self._blocked(transform.x + dx * step, transform.y):
                transform.x += dx * step
            if dy and not self._blocked(transform.x, transform.y + dy * step):
                transform.y += dy * step

        if self.camera:
            self.camera.follow(transform.x, transform.y)

    def _blocked(self, x: float, y: float) -> bool:
        size = self.tuning.tile_size
        box = centered_box(x, y, size * self.tuning.hitbox_inset)
        walls = (
            tile.get(Transform).position
            for tile in self.world.get_entities_with(TileCollider, Transform)
        )
        return overlaps_any(box, walls, size)
