"""
Game modes on top of the scene stack.

The overworld scene sits at the bottom of the stack for the whole
game; entering Battle pushes a fresh battle scene over it and entering
Overworld pops it again, which tears down everything the battle
spawned.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable, Protocol

if TYPE_CHECKING:
    from engine.core.scene import Scene, SceneManager
    from engine.input.handler import InputHandler


logger = logging.getLogger(__name__)


class GameMode(Enum):
    """Top-level modes the game switches between."""
    OVERWORLD = "overworld"
    BATTLE = "battle"


class ModeRequests(Protocol):
    """Anything that accepts mode change requests."""

    def enter_mode(self, mode: GameMode) -> None: ...


class ModeHost:
    """
    Owns the current GameMode and turns mode requests into scene
    stack operations.

    Mode changes take effect on the scene stack at the start of the
    next update, but current_mode() reports the requested mode right
    away so a second request in the same tick is ignored. Pending
    input is cleared on every change so a key that ended one mode does
    not act in the next.

    When a transition_factory is given, its scene is pushed over the
    new mode on every change, e.g. a fade in from black.
    """

    def __init__(
        self,
        scene_manager: SceneManager,
        input_handler: InputHandler,
        battle_factory: Callable[[], Scene],
        transition_factory: Callable[[], Scene] | None = None,
    ):
        self.scene_manager = scene_manager
        self.input = input_handler
        self._battle_factory = battle_factory
        self._transition_factory = transition_factory
        self._mode = GameMode.OVERWORLD

    def current_mode(self) -> GameMode:
        return self._mode

    def enter_mode(self, mode: GameMode) -> None:
        """Request a switch to mode; requesting the current mode does nothing."""
        if mode is self._mode:
            logger.debug("Already in %s mode, ignoring request", mode.value)
            return

        if mode is GameMode.BATTLE:
            self.scene_manager.push(self._battle_factory())
        else:
            self.scene_manager.pop()
        if self._transition_factory is not None:
            self.scene_manager.push(self._transition_factory())

        logger.info("Mode change: %s -> %s", self._mode.value, mode.value)
        self._mode = mode
        self.input.clear()
