"""
Floating health text for battle actors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ascii_rpg.components import HealthText, StatBlock

if TYPE_CHECKING:
    from engine.graphics.ascii import AsciiRenderer

HEALTH_TEXT_Z = 8.0


@dataclass(frozen=True)
class HealthDisplay:
    """Current text handle of one actor and where it is placed."""
    handle: int
    anchor: tuple[float, float]
    offset: tuple[float, float]


def health_label(stats: StatBlock) -> str:
    return f"Health: {stats.health}"


class HealthDisplays:
    """
    Association table actor id -> current health text.

    The text is never edited in place: every change despawns the old
    text and spawns a new one at the same offset from the actor's
    anchor, then replaces the table entry in a single assignment.
    """

    def __init__(self, renderer: AsciiRenderer):
        self.renderer = renderer
        self._displays: dict[int, HealthDisplay] = {}

    def show(
        self,
        actor_id: int,
        stats: StatBlock,
        anchor: tuple[float, float],
        offset: tuple[float, float],
    ) -> int:
        """Create the first health text for an actor."""
        if actor_id in self._displays:
            return self.refresh(actor_id, stats)
        return self._spawn(actor_id, stats, anchor, offset)

    def refresh(self, actor_id: int, stats: StatBlock) -> int:
        """
        Replace an actor's health text with one showing stats.

        Raises:
            KeyError: If the actor has no health text
        """
        current = self._displays[actor_id]
        self.renderer.despawn(current.handle)
        return self._spawn(actor_id, stats, current.anchor, current.offset)

    def _spawn(
        self,
        actor_id: int,
        stats: StatBlock,
        anchor: tuple[float, float],
        offset: tuple[float, float],
    ) -> int:
        x = anchor[0] + offset[0]
        y = anchor[1] + offset[1]
        handle = self.renderer.spawn_text(health_label(stats), (x, y, HEALTH_TEXT_Z))
        self.renderer.world.get_entity(handle).add(
            HealthText(actor_id=actor_id, offset_x=offset[0], offset_y=offset[1])
        )
        self._displays[actor_id] = HealthDisplay(handle, anchor, offset)
        return handle

    def handle_of(self, actor_id: int) -> int | None:
        display = self._displays.get(actor_id)
        return display.handle if display else None

    def clear(self) -> None:
        for display in self._displays.values():
            self.renderer.despawn(display.handle)
        self._displays.clear()
