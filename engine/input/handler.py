"""
Input handler with action-based abstraction.

Translates raw keyboard events into semantic Actions and tracks
which actions went down or up since the previous fixed update.

Usage:
    if input.is_action_pressed(Action.MOVE_RIGHT):
        ...

    if input.is_action_just_pressed(Action.CONFIRM):
        ...
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import pygame

from engine.core.actions import Action, DEFAULT_KEY_BINDINGS
from engine.core.events import EventBus


class InputEvent(Enum):
    """Input-specific events."""
    ACTION_PRESSED = "input.action_pressed"
    ACTION_RELEASED = "input.action_released"


@dataclass
class InputState:
    """Complete input state for current frame."""
    actions_pressed: set[Action] = field(default_factory=set)
    actions_just_pressed: set[Action] = field(default_factory=set)
    actions_just_released: set[Action] = field(default_factory=set)

    keys_pressed: set[int] = field(default_factory=set)
    keys_just_pressed: set[int] = field(default_factory=set)


class InputHandler:
    """
    Keyboard input processing.

    process_event() is fed every pygame event; update() is called once
    at the start of each fixed update to compute the just-pressed sets.
    """

    def __init__(self, event_bus: EventBus | None = None):
        self.event_bus = event_bus

        self._state = InputState()
        self._prev_actions: set[Action] = set()
        self._prev_keys: set[int] = set()

        self._key_bindings = {action: list(keys) for action, keys in DEFAULT_KEY_BINDINGS.items()}
        self._reverse_key_bindings: dict[int, list[Action]] = {}
        self._rebuild_reverse_bindings()

    def _rebuild_reverse_bindings(self) -> None:
        """Build reverse lookup: key -> actions."""
        self._reverse_key_bindings.clear()
        for action, keys in self._key_bindings.items():
            for key in keys:
                self._reverse_key_bindings.setdefault(key, []).append(action)

    # Public API

    def is_action_pressed(self, action: Action) -> bool:
        """Check if an action is currently held down."""
        return action in self._state.actions_pressed

    def is_action_just_pressed(self, action: Action) -> bool:
        """Check if an action was just pressed this frame."""
        return action in self._state.actions_just_pressed

    def is_action_just_released(self, action: Action) -> bool:
        """Check if an action was just released this frame."""
        return action in self._state.actions_just_released

    def get_movement_vector(self) -> tuple[float, float]:
        """
        Get movement direction from held movement actions.

        Returns:
            (x, y) tuple where each component is -1, 0, or 1
        """
        x = 0.0
        y = 0.0

        if self.is_action_pressed(Action.MOVE_LEFT):
            x -= 1.0
        if self.is_action_pressed(Action.MOVE_RIGHT):
            x += 1.0
        if self.is_action_pressed(Action.MOVE_UP):
            y -= 1.0
        if self.is_action_pressed(Action.MOVE_DOWN):
            y += 1.0

        return (x, y)

    def get_menu_delta(self) -> int:
        """
        Horizontal menu step for this frame.

        Both directions pressed in the same frame resolve to the one
        applied last (right), never to a crash or a double step.
        """
        delta = 0
        if self.is_action_just_pressed(Action.MENU_LEFT):
            delta = -1
        if self.is_action_just_pressed(Action.MENU_RIGHT):
            delta = 1
        return delta

    def clear(self) -> None:
        """
        Forget every held and just-pressed input.

        Used on mode changes so a confirm or a movement key that ended
        one mode does not leak into the next.
        """
        self._state.actions_pressed.clear()
        self._state.actions_just_pressed.clear()
        self._state.actions_just_released.clear()
        self._state.keys_pressed.clear()
        self._state.keys_just_pressed.clear()
        self._prev_actions.clear()
        self._prev_keys.clear()

    # Key binding management

    def bind_key(self, action: Action, key: int) -> None:
        """Add a key binding for an action."""
        keys = self._key_bindings.setdefault(action, [])
        if key not in keys:
            keys.append(key)
        self._rebuild_reverse_bindings()

    def get_bindings(self, action: Action) -> list[int]:
        """Get all key bindings for an action."""
        return self._key_bindings.get(action, []).copy()

    # Frame update

    def process_event(self, event: pygame.event.Event) -> None:
        """Process a pygame event."""
        if event.type == pygame.KEYDOWN:
            self._on_key_down(event.key)
        elif event.type == pygame.KEYUP:
            self._on_key_up(event.key)

    def update(self) -> None:
        """
        Update input state for new frame.

        Call this at the start of each fixed update.
        """
        self._state.actions_just_pressed = self._state.actions_pressed - self._prev_actions
        self._state.actions_just_released = self._prev_actions - self._state.actions_pressed
        self._state.keys_just_pressed = self._state.keys_pressed - self._prev_keys

        if self.event_bus:
            for action in self._state.actions_just_pressed:
                self.event_bus.publish(InputEvent.ACTION_PRESSED, action=action)
            for action in self._state.actions_just_released:
                self.event_bus.publish(InputEvent.ACTION_RELEASED, action=action)

        self._prev_actions = self._state.actions_pressed.copy()
        self._prev_keys = self._state.keys_pressed.copy()

    def _on_key_down(self, key: int) -> None:
        self._state.keys_pressed.add(key)
        for action in self._reverse_key_bindings.get(key, []):
            self._state.actions_pressed.add(action)

    def _on_key_up(self, key: int) -> None:
        self._state.keys_pressed.discard(key)

        # Release an action only when none of its other keys are held
        for action in self._reverse_key_bindings.get(key, []):
            still_pressed = any(
                other != key and other in self._state.keys_pressed
                for other in self._key_bindings.get(action, [])
            )
            if not still_pressed:
                self._state.actions_pressed.discard(action)
