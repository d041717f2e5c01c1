"""
Core Game class with fixed timestep game loop.

The Game class is the main entry point for the engine. It handles:
- Window creation (Pygame)
- Fixed timestep update loop (deterministic timers)
- Variable render loop
- Scene management delegation
"""

from __future__ import annotations

import logging
import time

import pygame

from engine.core.scene import SceneManager
from engine.core.events import EventBus, EngineEvent
from engine.graphics.camera import Camera
from engine.input.handler import InputHandler


logger = logging.getLogger(__name__)


class GameConfig:
    """Configuration for the game engine."""

    def __init__(
        self,
        title: str = "ASCII RPG",
        width: int = 1280,
        height: int = 720,
        target_fps: int = 60,
        fixed_timestep: float = 1 / 60,
        max_frame_skip: int = 5,
        clear_color: tuple[int, int, int] = (25, 25, 25),
        resizable: bool = False,
    ):
        self.title = title
        self.width = width
        self.height = height
        self.target_fps = target_fps
        self.fixed_timestep = fixed_timestep
        self.max_frame_skip = max_frame_skip
        self.clear_color = clear_color
        self.resizable = resizable


class Game:
    """
    Main game engine class.

    Logic runs at config.fixed_timestep regardless of frame rate, so
    every timer in the game (encounter dwell, attack effects) advances
    by the same dt on every machine.

    Usage:
        game = Game(GameConfig(title="My Game"))
        game.scene_manager.push(MyStartScene(game))
        game.run()
    """

    def __init__(self, config: GameConfig | None = None):
        self.config = config or GameConfig()
        self._running = False

        pygame.init()
        pygame.mixer.init()

        flags = pygame.RESIZABLE if self.config.resizable else 0
        self.screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            flags,
        )
        pygame.display.set_caption(self.config.title)

        # Core systems
        self.event_bus = EventBus()
        self.input = InputHandler(self.event_bus)
        self.scene_manager = SceneManager(self)
        self.camera = Camera(self.config.width, self.config.height)

        # Timing
        self._clock = pygame.time.Clock()
        self._accumulator = 0.0
        self._current_time = time.perf_counter()

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def run(self) -> None:
        """
        Start the main game loop.

        Uses a fixed timestep for updates with variable rendering.
        """
        self._running = True
        self._current_time = time.perf_counter()
        self.event_bus.publish(EngineEvent.GAME_START)
        logger.info("Game loop started")

        while self._running:
            new_time = time.perf_counter()
            frame_time = min(new_time - self._current_time, 0.25)
            self._current_time = new_time
            self._accumulator += frame_time

            self._process_events()

            updates = 0
            while self._accumulator >= self.config.fixed_timestep:
                self._fixed_update(self.config.fixed_timestep)
                self._accumulator -= self.config.fixed_timestep
                updates += 1

                if updates >= self.config.max_frame_skip:
                    self._accumulator = 0
                    break

            self._render(self._accumulator / self.config.fixed_timestep)
            self._clock.tick(self.config.target_fps)

            if self.scene_manager.is_empty and not self.scene_manager.has_pending:
                self.quit()

        self._shutdown()

    def quit(self) -> None:
        """Request game shutdown."""
        self._running = False

    def _process_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.quit()
            else:
                self.input.process_event(event)
                self.scene_manager.handle_event(event)

    def _fixed_update(self, dt: float) -> None:
        self.input.update()
        self.scene_manager.update(dt)
        self.camera.update(dt)

    def _render(self, alpha: float) -> None:
        self.screen.fill(self.config.clear_color)
        self.scene_manager.render(alpha)
        pygame.display.flip()

    def _shutdown(self) -> None:
        self.event_bus.publish(EngineEvent.GAME_QUIT)
        self.scene_manager.clear()
        self.scene_manager.process_pending()
        pygame.mixer.quit()
        pygame.quit()
        logger.info("Game shut down")
