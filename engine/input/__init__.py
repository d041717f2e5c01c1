"""Input handling module."""

from engine.input.handler import InputHandler, InputState, InputEvent

__all__ = [
    "InputHandler",
    "InputState",
    "InputEvent",
]
