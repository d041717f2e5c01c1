"""
Battle system - the turn-based state machine.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from engine.core import Entity, System
from engine.core.actions import Action
from ascii_rpg.battle.context import BattleContext
from ascii_rpg.battle.effects import AttackEffectScheduler
from ascii_rpg.battle.errors import CombatInvariantError
from ascii_rpg.battle.events import CombatEvent
from ascii_rpg.battle.intents import FightIntent
from ascii_rpg.battle.menu import MenuOption
from ascii_rpg.battle.resolver import FightResolver
from ascii_rpg.battle.rewards import RewardOutcome, grant_experience
from ascii_rpg.battle.states import BattleState
from ascii_rpg.components import Enemy, PlayerProgression

if TYPE_CHECKING:
    from engine.input.handler import InputHandler


logger = logging.getLogger(__name__)


class BattleSystem(System):
    """
    Runs one battle tick.

    Order within a tick:
        1. Cancel (Escape) ends the battle from any state but EXITING
        2. Menu input and confirm
        3. Enemy AI
        4. Fight resolution
        5. Attack effect, advancing past the attack state when done
        6. On-enter hooks for every state entered this tick
    """

    def __init__(self, context: BattleContext, input_handler: InputHandler):
        super().__init__()
        self.context = context
        self.input = input_handler
        self.resolver = FightResolver()
        self.effects = AttackEffectScheduler()

    def update(self, dt: float) -> None:
        if not self.enabled:
            return

        ctx = self.context
        if ctx.state is BattleState.EXITING:
            return

        if self.input.is_action_just_pressed(Action.CANCEL):
            logger.info("Battle cancelled from %s", ctx.state.name)
            ctx.exit_to_overworld()
            self.commit()
            return

        self.process_input()
        self.run_enemy_ai()
        self.resolver.resolve(ctx)
        self.advance_effect(dt)
        self.commit()

    def process_entity(self, entity: Entity, dt: float) -> None:
        """Battle logic works on the context, not per entity."""

    # Steps

    def process_input(self) -> None:
        """Menu navigation in PLAYER_TURN and confirm in every waiting state."""
        ctx = self.context
        confirmed = self.input.is_action_just_pressed(Action.CONFIRM)

        if ctx.state is BattleState.PLAYER_TURN:
            delta = self.input.get_menu_delta()
            if delta:
                ctx.menu.move(delta)
            if confirmed:
                self.choose(ctx.menu.selected)

        elif ctx.state is BattleState.REWARD and confirmed:
            ctx.exit_to_overworld()

        elif ctx.state is BattleState.DEFEAT and confirmed:
            ctx.exit_to_overworld()

    def choose(self, option: MenuOption) -> None:
        """Carry out a menu command."""
        ctx = self.context
        if option is MenuOption.FIGHT:
            ctx.intents.push(FightIntent(
                target=ctx.enemy.id,
                damage_amount=ctx.player_stats.attack,
                next_state=BattleState.PLAYER_ATTACK,
            ))
            ctx.transition(BattleState.PLAYER_ATTACK)
        elif option is MenuOption.RUN:
            logger.info("Player ran from battle")
            ctx.exit_to_overworld()

    def run_enemy_ai(self) -> None:
        """The enemy attacks the player once per enemy turn."""
        ctx = self.context
        if ctx.state is not BattleState.ENEMY_TURN:
            return

        ctx.intents.push(FightIntent(
            target=ctx.player.id,
            damage_amount=ctx.enemy_stats.attack,
            next_state=BattleState.ENEMY_ATTACK,
        ))
        ctx.transition(BattleState.ENEMY_TURN_RESOLVING)

    def advance_effect(self, dt: float) -> None:
        ctx = self.context
        state = ctx.state
        done = self.effects.update(ctx.effect, state, dt)

        if state is BattleState.PLAYER_ATTACK:
            ctx.renderer.set_visible(ctx.enemy.id, ctx.effect.target_visible)

        if done:
            self.finish_attack()

    def finish_attack(self) -> None:
        """Leave an attack state once its effect has played."""
        ctx = self.context
        if ctx.state is BattleState.PLAYER_ATTACK:
            ctx.transition(
                BattleState.REWARD if ctx.enemy_stats.is_dead else BattleState.ENEMY_TURN
            )
        elif ctx.state is BattleState.ENEMY_ATTACK:
            ctx.transition(
                BattleState.DEFEAT if ctx.player_stats.is_dead else BattleState.PLAYER_TURN
            )

    def commit(self) -> None:
        """Run on-enter hooks and redraw the menu highlight."""
        ctx = self.context
        for state in ctx.take_entered():
            if state is BattleState.REWARD:
                self.grant_reward()
            elif state is BattleState.DEFEAT:
                self.show_defeat()

        ctx.menu_view.sync(ctx.menu, highlighted=ctx.state is BattleState.PLAYER_TURN)

    # On-enter hooks

    def grant_reward(self) -> RewardOutcome:
        ctx = self.context
        progression = ctx.player.try_get(PlayerProgression)
        if progression is None:
            raise CombatInvariantError(f"{ctx.player.name} has no PlayerProgression")

        kind = ctx.enemy.get(Enemy).kind
        amount = ctx.tuning.enemies[kind].experience
        outcome = grant_experience(
            progression,
            ctx.player_stats,
            amount,
            ctx.tuning.experience_threshold,
            ctx.tuning.level_up,
        )

        ctx.renderer.set_visible(ctx.enemy.id, False)
        ctx.show_message(f"+{outcome.experience_gained} EXP")
        if outcome.leveled_up:
            ctx.show_message("LEVEL UP!", line=1)
        ctx.health.refresh(ctx.player.id, ctx.player_stats)

        logger.info(
            "Defeated %s: +%d exp (total %d)",
            kind.value, outcome.experience_gained, outcome.experience_total,
        )
        ctx.event_bus.publish(
            CombatEvent.REWARD,
            experience=outcome.experience_gained,
            total=outcome.experience_total,
            leveled_up=outcome.leveled_up,
        )
        return outcome

    def show_defeat(self) -> None:
        logger.info("Player was defeated")
        self.context.show_message("YOU WERE DEFEATED")
