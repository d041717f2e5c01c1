"""
Fight intents - attacks waiting to be resolved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ascii_rpg.battle.states import BattleState


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FightIntent:
    """
    One attack request.

    Attributes:
        target: Entity id of the actor being attacked
        damage_amount: Raw damage before the target's defense
        next_state: State to enter once resolved, unless someone died
    """
    target: int
    damage_amount: int
    next_state: BattleState


class IntentQueue:
    """
    Intents queued during a tick.

    The resolver takes a single intent per tick: the oldest one. Any
    others queued in the same tick are dropped.
    """

    def __init__(self):
        self._intents: list[FightIntent] = []

    def push(self, intent: FightIntent) -> None:
        self._intents.append(intent)

    def take_oldest(self) -> FightIntent | None:
        """Remove and return the oldest intent, discarding the rest."""
        if not self._intents:
            return None

        oldest, *dropped = self._intents
        self._intents.clear()
        for intent in dropped:
            logger.debug("Dropped extra fight intent %s", intent)
        return oldest

    def pending(self) -> list[FightIntent]:
        """Copy of the queued intents, oldest first."""
        return list(self._intents)

    def clear(self) -> None:
        self._intents.clear()

    def __len__(self) -> int:
        return len(self._intents)
