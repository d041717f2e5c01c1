"""
Overworld scene - the map the player walks around on.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from engine.core import Entity, Scene, World
from engine.graphics.ascii import AsciiRenderer, AsciiRenderSystem
from ascii_rpg.components import Player, Transform
from ascii_rpg.world import EncounterSystem, PlayerMovementSystem, create_player, spawn_map

if TYPE_CHECKING:
    from engine.core import Game
    from ascii_rpg.config import CombatTuning
    from ascii_rpg.modes import ModeRequests
    from ascii_rpg.world import TileMap


logger = logging.getLogger(__name__)


class OverworldScene(Scene):
    """
    Bottom scene of the stack for the whole game.

    The map and the player are spawned on first entry. Every later
    entry means a battle just ended: the player gets control back and
    the camera returns to them.
    """

    def __init__(self, game: Game, modes: ModeRequests, tuning: CombatTuning, tile_map: TileMap):
        super().__init__(game)
        self.modes = modes
        self.tuning = tuning
        self.tile_map = tile_map
        self.player: Entity | None = None

    def on_enter(self) -> None:
        super().on_enter()
        if self.world is None:
            self._build()
        else:
            self.player.get(Player).active = True
            logger.info("Back in the overworld")

        self.game.input.clear()
        self.game.camera.set_center(*self.player.get(Transform).position)

    def _build(self) -> None:
        size = self.tuning.tile_size
        self.world = World(self.game.event_bus)
        renderer = AsciiRenderer(self.world, size)

        spawn_map(self.tile_map, renderer)
        col, row = self.tile_map.spawn or (0, 0)
        self.player = create_player(renderer, self.tuning, col * size, row * size)

        self.world.add_system(PlayerMovementSystem(self.game.input, self.tuning, self.game.camera))
        self.world.add_system(EncounterSystem(self.modes, self.tuning))
        self.world.add_system(AsciiRenderSystem(self.game.screen, self.game.camera, size))

    def update(self, dt: float) -> None:
        pass
