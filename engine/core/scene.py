"""
Scene management system.

Scenes represent game modes (overworld, battle, ...). The SceneManager
keeps a stack of them:
- Push: cover the current scene (e.g. start a battle over the map)
- Pop: remove the top scene and uncover the one below

Stack operations are requested at any time and applied at the start
of the next update, so a scene never disappears mid-tick.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import pygame

from engine.core.events import EngineEvent

if TYPE_CHECKING:
    from engine.core.game import Game
    from engine.core.world import World


logger = logging.getLogger(__name__)


class Scene(ABC):
    """
    Abstract base class for game scenes.

    Lifecycle:
        1. __init__: Called when scene is created
        2. on_enter: Called when scene becomes the top of the stack
        3. update/render: Called each frame while active
        4. on_exit: Called when scene is removed or covered
        5. on_destroy: Called when scene is permanently removed
    """

    def __init__(self, game: Game):
        self.game = game
        self.world: World | None = None
        self._is_active = False
        self._is_transparent = False  # If True, scene below is also rendered
        self._blocks_update = True    # If True, scene below doesn't update

    @property
    def is_active(self) -> bool:
        """Whether this scene is currently the top scene."""
        return self._is_active

    @property
    def is_transparent(self) -> bool:
        return self._is_transparent

    @property
    def blocks_update(self) -> bool:
        return self._blocks_update

    def on_enter(self) -> None:
        """Called when scene becomes active (pushed or uncovered)."""
        self._is_active = True

    def on_exit(self) -> None:
        """Called when scene is deactivated (popped or covered)."""
        self._is_active = False

    def on_destroy(self) -> None:
        """Called when scene is permanently removed from the stack."""
        if self.world:
            self.world.clear()

    @abstractmethod
    def update(self, dt: float) -> None:
        """Update scene logic (fixed timestep)."""

    def render(self, alpha: float) -> None:
        """Scene-level drawing before the world's render systems run."""

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Handle a raw pygame event; return True if consumed."""
        return False


class SceneManager:
    """
    Manages a stack of scenes.

    The scene on top of the stack is the active scene.
    """

    def __init__(self, game: Game):
        self.game = game
        self._stack: list[Scene] = []
        self._pending_operations: list[tuple[str, Any]] = []

    @property
    def current(self) -> Scene | None:
        """Get the current (top) scene."""
        return self._stack[-1] if self._stack else None

    @property
    def is_empty(self) -> bool:
        return len(self._stack) == 0

    @property
    def has_pending(self) -> bool:
        """Whether stack operations are waiting for the next update."""
        return bool(self._pending_operations)

    def push(self, scene: Scene) -> None:
        """Request a new scene on top of the stack."""
        self._pending_operations.append(("push", scene))

    def pop(self) -> None:
        """Request removal of the top scene."""
        self._pending_operations.append(("pop", None))

    def clear(self) -> None:
        """Request removal of every scene."""
        self._pending_operations.append(("clear", None))

    def update(self, dt: float) -> None:
        """Apply pending operations, then update the unblocked scenes."""
        self.process_pending()

        for scene in self._get_update_list():
            scene.update(dt)
            if scene.world:
                scene.world.update(dt)

    def render(self, alpha: float) -> None:
        """Render scenes from the last opaque one upward."""
        for scene in self._get_render_list():
            scene.render(alpha)
            if scene.world:
                scene.world.render(alpha)

    def handle_event(self, event: pygame.event.Event) -> None:
        """Pass event to the current scene."""
        if self.current:
            self.current.handle_event(event)

    def process_pending(self) -> None:
        """Apply queued stack operations in request order."""
        while self._pending_operations:
            op, arg = self._pending_operations.pop(0)

            if op == "push":
                self._do_push(arg)
            elif op == "pop":
                self._do_pop()
            elif op == "clear":
                while self._stack:
                    self._do_pop(uncover=False)

    def _do_push(self, scene: Scene) -> None:
        if self._stack:
            self._stack[-1].on_exit()
        self._stack.append(scene)
        scene.on_enter()
        logger.debug("Pushed scene %s", type(scene).__name__)
        self.game.event_bus.publish(EngineEvent.SCENE_PUSHED, scene=scene)

    def _do_pop(self, uncover: bool = True) -> None:
        if not self._stack:
            return

        scene = self._stack.pop()
        scene.on_exit()
        scene.on_destroy()
        logger.debug("Popped scene %s", type(scene).__name__)
        self.game.event_bus.publish(EngineEvent.SCENE_POPPED, scene=scene)

        if uncover and self._stack:
            self._stack[-1].on_enter()

    def _get_render_list(self) -> list[Scene]:
        result: list[Scene] = []
        for scene in reversed(self._stack):
            result.insert(0, scene)
            if not scene.is_transparent:
                break
        return result

    def _get_update_list(self) -> list[Scene]:
        result: list[Scene] = []
        for scene in reversed(self._stack):
            result.insert(0, scene)
            if scene.blocks_update:
                break
        return result
