"""
Screen fade played over a mode change.

The fade covers the new mode with black and clears it over a fixed
time, then removes itself. Scenes below it are drawn but frozen until
it is gone.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pygame

from engine.core.scene import Scene

if TYPE_CHECKING:
    from engine.core.game import Game


logger = logging.getLogger(__name__)


class FadeScene(Scene):
    """Fade from black to the scene below."""

    def __init__(self, game: Game, duration: float, color: tuple[int, int, int] = (0, 0, 0)):
        super().__init__(game)
        self.duration = duration
        self.color = color
        self.progress = 1.0  # 1 = fully black, 0 = clear
        self._is_transparent = True
        self._overlay: pygame.Surface | None = None
        self._done = False

    @property
    def finished(self) -> bool:
        return self._done

    def fade_in(self, dt: float) -> bool:
        """Clear the fade by dt. Returns True when fully clear."""
        if self.duration <= 0:
            self.progress = 0.0
        else:
            self.progress = max(0.0, self.progress - dt / self.duration)
        return self.progress <= 0

    def update(self, dt: float) -> None:
        if self._done:
            return
        if self.fade_in(dt):
            self._done = True
            logger.debug("Fade finished")
            self.game.scene_manager.pop()

    def render(self, alpha: float) -> None:
        screen = self.game.screen
        size = screen.get_size()
        if self._overlay is None or self._overlay.get_size() != size:
            self._overlay = pygame.Surface(size)
        self._overlay.fill(self.color)
        self._overlay.set_alpha(int(255 * self.progress))
        screen.blit(self._overlay, (0, 0))
