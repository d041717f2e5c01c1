"""
Tile components - map cells the overworld reacts to.
"""

from __future__ import annotations

from engine.core.component import Component, register_component


@register_component
class TileCollider(Component):
    """Marks a solid tile the player cannot walk into."""


@register_component
class EncounterZone(Component):
    """Marks a tile where standing long enough starts a battle."""
