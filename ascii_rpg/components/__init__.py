"""
Game components - data-only component definitions.

All components are pydantic models containing only data.
Logic lives in systems and battle controllers, not in components.
"""

from engine.core.transform import Transform
from ascii_rpg.components.character import StatBlock, PlayerProgression
from ascii_rpg.components.actors import (
    EnemyKind,
    Player,
    Enemy,
    EncounterTracker,
    HealthText,
)
from ascii_rpg.components.tiles import TileCollider, EncounterZone

__all__ = [
    # Transform
    "Transform",
    # Character
    "StatBlock",
    "PlayerProgression",
    # Actors
    "EnemyKind",
    "Player",
    "Enemy",
    "EncounterTracker",
    "HealthText",
    # Tiles
    "TileCollider",
    "EncounterZone",
]
