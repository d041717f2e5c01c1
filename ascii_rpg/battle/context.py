"""
Battle context - all state of one battle, passed to every battle step.

A context is created when a battle scene is entered and dropped with
the scene, so no combat state outlives its battle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from engine.core import Component, Entity, World
from ascii_rpg.battle.displays import HealthDisplays
from ascii_rpg.battle.effects import AttackEffectState
from ascii_rpg.battle.errors import CombatInvariantError
from ascii_rpg.battle.intents import IntentQueue
from ascii_rpg.battle.menu import MenuSelector, MenuView
from ascii_rpg.battle.states import BattleState
from ascii_rpg.components import Enemy, Player, StatBlock, Transform
from ascii_rpg.modes import GameMode, ModeRequests

if TYPE_CHECKING:
    from engine.core.events import EventBus
    from engine.graphics.ascii import AsciiRenderer
    from ascii_rpg.config import CombatTuning


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BattleLayout:
    """Battle screen positions in world pixels; the battle camera looks at (0, 0)."""
    enemy: tuple[float, float]
    enemy_health_offset: tuple[float, float]
    player_anchor: tuple[float, float]
    player_health_offset: tuple[float, float]
    menu_center: tuple[float, float]
    message: tuple[float, float]

    @classmethod
    def for_tile_size(cls, size: float) -> BattleLayout:
        return cls(
            enemy=(0.0, -2 * size),
            enemy_health_offset=(-4 * size, -2 * size),
            player_anchor=(-8 * size, 2 * size),
            player_health_offset=(0.0, 0.0),
            menu_center=(0.0, 5 * size),
            message=(-4 * size, 0.0),
        )


class BattleContext:
    """
    State of a single battle.

    transition() is the only way the battle state changes. It records
    every state entered (history, and the not yet committed entries
    used for on-enter hooks), restarts the attack effect on entering
    an attack state and settles it on leaving one.
    """

    def __init__(
        self,
        renderer: AsciiRenderer,
        player: Entity,
        enemy: Entity,
        tuning: CombatTuning,
        event_bus: EventBus,
        modes: ModeRequests,
        layout: BattleLayout | None = None,
    ):
        if not player.has(Player):
            raise CombatInvariantError(f"{player.name} is not the player")
        if not enemy.has(Enemy):
            raise CombatInvariantError(f"{enemy.name} is not an enemy")

        self.renderer = renderer
        self.player = player
        self.enemy = enemy
        self.tuning = tuning
        self.event_bus = event_bus
        self.modes = modes
        self.layout = layout or BattleLayout.for_tile_size(tuning.tile_size)

        # Both actors must carry stats before the first tick
        self.stats_of(player)
        self.stats_of(enemy)

        self.state = BattleState.PLAYER_TURN
        self.history: list[BattleState] = [self.state]
        self._entered: list[BattleState] = []

        self.intents = IntentQueue()
        self.effect = AttackEffectState(
            duration=tuning.attack_duration,
            flash_period=tuning.flash_period,
            shake_amplitude=tuning.shake_amplitude,
        )
        self.menu = MenuSelector()
        self.health = HealthDisplays(renderer)
        self.messages: list[int] = []

        self.health.show(
            player.id, self.player_stats,
            self.layout.player_anchor, self.layout.player_health_offset,
        )
        self.health.show(
            enemy.id, self.enemy_stats,
            enemy.get(Transform).position, self.layout.enemy_health_offset,
        )
        self.menu_view = MenuView(renderer, self.layout.menu_center)

    # State

    def transition(self, new_state: BattleState) -> None:
        """Enter new_state; re-entering the current state does nothing."""
        old_state = self.state
        if new_state is old_state:
            return

        if old_state.is_attack:
            self.effect.settle()
            self.renderer.set_visible(self.enemy.id, True)

        self.state = new_state
        self.history.append(new_state)
        self._entered.append(new_state)

        if new_state.is_attack:
            self.effect.reset()

        logger.debug("Battle state %s -> %s", old_state.name, new_state.name)

    def take_entered(self) -> list[BattleState]:
        """States entered since the last call, oldest first."""
        entered, self._entered = self._entered, []
        return entered

    def exit_to_overworld(self) -> None:
        """Finish the battle and ask for the overworld.

        A defeated player always leaves with full health, however the
        battle is left.
        """
        if self.state is BattleState.DEFEAT:
            self.player_stats.restore()
        self.transition(BattleState.EXITING)
        self.intents.clear()
        self.modes.enter_mode(GameMode.OVERWORLD)

    # Actors

    def actor(self, entity_id: int) -> Entity:
        """
        Battle actor by entity id.

        Raises:
            CombatInvariantError: If the id is neither the player nor the enemy
        """
        if entity_id == self.player.id:
            return self.player
        if entity_id == self.enemy.id:
            return self.enemy
        raise CombatInvariantError(f"Entity {entity_id} is not part of this battle")

    def is_enemy(self, actor: Entity) -> bool:
        return actor.id == self.enemy.id

    @staticmethod
    def stats_of(actor: Entity) -> StatBlock:
        """
        Raises:
            CombatInvariantError: If the actor has no StatBlock
        """
        stats = actor.try_get(StatBlock)
        if stats is None:
            raise CombatInvariantError(f"{actor.name} has no StatBlock")
        return stats

    @property
    def player_stats(self) -> StatBlock:
        return self.stats_of(self.player)

    @property
    def enemy_stats(self) -> StatBlock:
        return self.stats_of(self.enemy)

    # Presentation

    def show_message(self, text: str, line: int = 0) -> int:
        """Spawn a line of battle text below the message origin."""
        x, y = self.layout.message
        handle = self.renderer.spawn_text(text, (x, y + line * self.tuning.tile_size, 8.0))
        self.messages.append(handle)
        return handle


def find_single(world: World, *component_types: type[Component]) -> Entity:
    """
    The one entity in world carrying all component_types.

    Raises:
        CombatInvariantError: If there are none or several
    """
    try:
        return world.single(*component_types)
    except LookupError as e:
        raise CombatInvariantError(str(e)) from e
