"""
Fight resolution - turns queued intents into damage.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ascii_rpg.battle.events import CombatEvent
from ascii_rpg.battle.intents import FightIntent
from ascii_rpg.battle.states import BattleState

if TYPE_CHECKING:
    from ascii_rpg.battle.context import BattleContext


logger = logging.getLogger(__name__)


def resolve_damage(health: int, damage: int, defense: int) -> int:
    """
    Health left after a hit.

    Defense is subtracted from the raw damage and the clamp applies to
    the resulting health. A defense above the damage makes the hit do
    nothing; it never heals.
    """
    return min(max(health - (damage - defense), 0), health)


class FightResolver:
    """
    Applies at most one intent per tick.

    The target's health text is recreated with the new value and a HIT
    event is published. A kill decides the battle right away (REWARD
    for the enemy, DEFEAT for the player); otherwise the battle moves
    to the intent's next_state.
    """

    def resolve(self, ctx: BattleContext) -> FightIntent | None:
        intent = ctx.intents.take_oldest()
        if intent is None:
            return None

        target = ctx.actor(intent.target)
        stats = ctx.stats_of(target)

        before = stats.health
        stats.health = resolve_damage(before, intent.damage_amount, stats.defense)
        logger.debug(
            "%s hit for %d (defense %d): health %d -> %d",
            target.name, intent.damage_amount, stats.defense, before, stats.health,
        )

        ctx.health.refresh(target.id, stats)
        ctx.event_bus.publish(
            CombatEvent.HIT,
            target=target,
            damage=before - stats.health,
            health=stats.health,
        )

        if stats.is_dead:
            ctx.transition(BattleState.REWARD if ctx.is_enemy(target) else BattleState.DEFEAT)
        else:
            ctx.transition(intent.next_state)
        return intent
