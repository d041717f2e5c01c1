"""
Actor components - markers for the player, enemies and encounter timing.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from engine.core.component import Component, register_component


class EnemyKind(Enum):
    """Closed set of enemies that can appear in a battle."""
    BAT = "bat"
    GHOST = "ghost"


@register_component
class Player(Component):
    """
    Marks the player entity.

    Attributes:
        speed: Movement speed in tiles per second
        active: False while the player must not move (e.g. in battle)
    """
    speed: float = Field(default=3.0, ge=0.0)
    active: bool = True


@register_component
class Enemy(Component):
    """Marks the battle's enemy entity and which kind it is."""
    kind: EnemyKind = EnemyKind.BAT


@register_component
class EncounterTracker(Component):
    """Seconds the player has spent continuously on encounter tiles."""
    dwell_timer: float = Field(default=0.0, ge=0.0)


@register_component
class HealthText(Component):
    """
    Marks a health text entity and the actor it describes.

    Attributes:
        actor_id: Entity id of the actor whose health is shown
        offset_x: Position relative to the actor, kept when recreated
        offset_y: Position relative to the actor, kept when recreated
    """
    actor_id: int
    offset_x: float = 0.0
    offset_y: float = 0.0
