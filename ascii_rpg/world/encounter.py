"""
Encounter trigger - starts a battle after the player lingers in tall grass.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from engine.core import Entity, System
from ascii_rpg.components import EncounterTracker, EncounterZone, Player, Transform
from ascii_rpg.modes import GameMode, ModeRequests
from ascii_rpg.world.collision import centered_box, overlaps_any

if TYPE_CHECKING:
    from ascii_rpg.config import CombatTuning


logger = logging.getLogger(__name__)


class EncounterSystem(System):
    """
    Accumulates the time the player's hit-box overlaps encounter tiles.

    Leaving the zones resets the timer. Reaching the threshold fires a
    single battle request: the player is frozen, Battle mode is
    requested and the timer starts over. There is no randomness in
    when a battle starts.
    """

    required_components = [Player, EncounterTracker, Transform]

    def __init__(self, modes: ModeRequests, tuning: CombatTuning):
        super().__init__()
        self.modes = modes
        self.tuning = tuning

    def process_entity(self, entity: Entity, dt: float) -> None:
        player = entity.get(Player)
        if not player.active:
            return

        tracker = entity.get(EncounterTracker)
        transform = entity.get(Transform)

        if not self._in_zone(transform):
            tracker.dwell_timer = 0.0
            return

        tracker.dwell_timer += dt
        if tracker.dwell_timer >= self.tuning.dwell_threshold:
            logger.info("Encounter triggered after %.2fs", tracker.dwell_timer)
            tracker.dwell_timer = 0.0
            player.active = False
            self.modes.enter_mode(GameMode.BATTLE)

    def _in_zone(self, transform: Transform) -> bool:
        size = self.tuning.tile_size
        box = centered_box(transform.x, transform.y, size * self.tuning.hitbox_inset)
        zones = (
            tile.get(Transform).position
            for tile in self.world.get_entities_with(EncounterZone, Transform)
        )
        return overlaps_any(box, zones, size)
