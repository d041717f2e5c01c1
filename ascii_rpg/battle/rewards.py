"""
Experience and level-ups.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ascii_rpg.components import PlayerProgression, StatBlock

if TYPE_CHECKING:
    from ascii_rpg.config import LevelUpBonus


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RewardOutcome:
    """Result of one reward event."""
    experience_gained: int
    experience_total: int
    leveled_up: bool


def apply_level_up(stats: StatBlock, bonus: LevelUpBonus) -> None:
    """Raise stats by one level's bonus."""
    # max_health first so health never exceeds it mid-update
    stats.max_health += bonus.max_health
    stats.health += bonus.max_health
    stats.attack += bonus.attack
    stats.defense += bonus.defense


def grant_experience(
    progression: PlayerProgression,
    stats: StatBlock,
    amount: int,
    threshold: int,
    bonus: LevelUpBonus,
) -> RewardOutcome:
    """
    Add experience and level up at most once.

    Crossing the threshold subtracts it a single time, even when the
    award would cover it more than once.
    """
    progression.experience += amount

    leveled_up = progression.experience >= threshold
    if leveled_up:
        progression.experience -= threshold
        progression.level += 1
        apply_level_up(stats, bonus)
        logger.info("Level up! Now level %d: %s", progression.level, stats)

    return RewardOutcome(amount, progression.experience, leveled_up)
