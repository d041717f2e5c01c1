"""
Battle states.
"""

from __future__ import annotations

from enum import Enum, auto


class BattleState(Enum):
    """
    Turn sequence of one battle.

    PLAYER_TURN is the initial state and EXITING the terminal one.
    ENEMY_TURN_RESOLVING is the enemy turn after its attack was
    queued, so the enemy attacks once per turn.
    """
    PLAYER_TURN = auto()
    PLAYER_ATTACK = auto()
    ENEMY_TURN = auto()
    ENEMY_TURN_RESOLVING = auto()
    ENEMY_ATTACK = auto()
    REWARD = auto()
    DEFEAT = auto()
    EXITING = auto()

    @property
    def is_attack(self) -> bool:
        """Whether an attack effect plays in this state."""
        return self in ATTACK_STATES


ATTACK_STATES = frozenset({BattleState.PLAYER_ATTACK, BattleState.ENEMY_ATTACK})
