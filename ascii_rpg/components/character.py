"""
Character components - combat stats and progression.
"""

from __future__ import annotations

from pydantic import Field, model_validator

from engine.core.component import Component, register_component


@register_component
class StatBlock(Component):
    """
    Combat statistics of one actor (the player or an enemy).

    Health always stays within [0, max_health]; pydantic rejects any
    construction or assignment that breaks this, so a bad mutation
    fails where it happens instead of showing up as a negative
    health text later.

    Attributes:
        health: Current hit points
        max_health: Upper bound for health
        attack: Damage dealt by this actor's attacks
        defense: Subtracted from incoming damage
    """
    health: int = Field(default=10, ge=0)
    max_health: int = Field(default=10, ge=0)
    attack: int = Field(default=2, ge=0)
    defense: int = Field(default=1, ge=0)

    @model_validator(mode="after")
    def _health_within_max(self) -> StatBlock:
        if self.health > self.max_health:
            raise ValueError(
                f"health {self.health} exceeds max_health {self.max_health}"
            )
        return self

    @property
    def is_dead(self) -> bool:
        return self.health == 0

    def restore(self) -> None:
        """Refill health to max_health."""
        self.health = self.max_health


@register_component
class PlayerProgression(Component):
    """
    Experience carried by the player between battles.

    Attributes:
        experience: Points toward the next level-up
        level: Levels gained so far, starting at 1
    """
    experience: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1)
