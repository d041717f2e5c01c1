"""
Enemy table lookups and battle enemy spawning.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from engine.core import Entity
from ascii_rpg.components import Enemy, EnemyKind, StatBlock

if TYPE_CHECKING:
    from engine.graphics.ascii import AsciiRenderer
    from ascii_rpg.config import CombatTuning


logger = logging.getLogger(__name__)

ENEMY_Z = 5.0


def draw_enemy_kind(rng: random.Random, tuning: CombatTuning) -> EnemyKind:
    """Pick an enemy kind by the table's weights."""
    kinds = list(EnemyKind)
    weights = [tuning.enemies[kind].weight for kind in kinds]
    return rng.choices(kinds, weights=weights, k=1)[0]


def spawn_enemy(
    renderer: AsciiRenderer,
    tuning: CombatTuning,
    kind: EnemyKind,
    position: tuple[float, float],
) -> Entity:
    """Spawn an enemy glyph with fresh base stats for its kind."""
    profile = tuning.enemies[kind]
    x, y = position
    enemy_id = renderer.spawn_sprite(
        profile.glyph, profile.color, (x, y, ENEMY_Z), name=kind.value.title(),
    )
    enemy = renderer.world.get_entity(enemy_id)
    enemy.add_tag("enemy")
    enemy.add(Enemy(kind=kind))
    enemy.add(StatBlock(
        health=profile.health,
        max_health=profile.health,
        attack=profile.attack,
        defense=profile.defense,
    ))
    logger.debug("Spawned %s with %s", kind.value, enemy.get(StatBlock))
    return enemy
