"""
Battle events published on the game's EventBus.
"""

from enum import Enum, auto


class CombatEvent(Enum):
    """
    Battle notifications.

    HIT carries target, damage and health; REWARD carries experience,
    total and leveled_up; BATTLE_STARTED carries kind.
    """
    BATTLE_STARTED = auto()
    BATTLE_ENDED = auto()
    HIT = auto()
    REWARD = auto()
