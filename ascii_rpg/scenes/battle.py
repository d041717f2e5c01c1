"""
Battle scene - one encounter, pushed over the overworld.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from engine.core import Scene, World
from engine.graphics.ascii import AsciiRenderer, AsciiRenderSystem
from ascii_rpg.battle import (
    BattleContext,
    BattleLayout,
    BattleSystem,
    CombatEvent,
    draw_enemy_kind,
    find_single,
    spawn_enemy,
)
from ascii_rpg.components import Player, StatBlock

if TYPE_CHECKING:
    from engine.core import Game
    from ascii_rpg.config import CombatTuning
    from ascii_rpg.modes import ModeRequests


logger = logging.getLogger(__name__)


class BattleScene(Scene):
    """
    Owns the battle's World and BattleContext.

    The player entity stays in the overworld's World; the battle only
    holds a reference to it. Everything the battle spawns (enemy,
    menu, texts) lives in the battle World and is destroyed with the
    scene.
    """

    def __init__(
        self,
        game: Game,
        modes: ModeRequests,
        tuning: CombatTuning,
        overworld_world: World,
        rng: random.Random | None = None,
    ):
        super().__init__(game)
        self.modes = modes
        self.tuning = tuning
        self.overworld_world = overworld_world
        self.rng = rng or random.Random()
        self.context: BattleContext | None = None

    def on_enter(self) -> None:
        super().on_enter()
        if self.world is not None:
            return

        size = self.tuning.tile_size
        layout = BattleLayout.for_tile_size(size)
        self.world = World(self.game.event_bus)
        renderer = AsciiRenderer(self.world, size)

        player = find_single(self.overworld_world, Player, StatBlock)
        kind = draw_enemy_kind(self.rng, self.tuning)
        enemy = spawn_enemy(renderer, self.tuning, kind, layout.enemy)

        self.context = BattleContext(
            renderer, player, enemy, self.tuning, self.game.event_bus, self.modes, layout,
        )
        self.world.add_system(BattleSystem(self.context, self.game.input))
        self.world.add_system(AsciiRenderSystem(self.game.screen, self.game.camera, size))

        self.game.camera.set_center(0.0, 0.0)
        logger.info("Battle started against %s", kind.value)
        self.game.event_bus.publish(CombatEvent.BATTLE_STARTED, kind=kind)

    def update(self, dt: float) -> None:
        camera = self.game.camera
        camera.set_center(0.0, 0.0)
        camera.shake_x = self.context.effect.current_shake if self.context else 0.0

    def on_destroy(self) -> None:
        self.game.camera.shake_x = 0.0
        super().on_destroy()

        if self.context is not None:
            logger.info("Battle ended in %s", self.context.state.name)
            self.context = None
        self.game.event_bus.publish(CombatEvent.BATTLE_ENDED)
