"""
Input action definitions.

Game logic asks about Actions, never raw keys:

    if input.is_action_just_pressed(Action.CONFIRM):
        ...
"""

from enum import Enum, auto

import pygame


class Action(Enum):
    """Semantic input actions."""

    # Menu navigation
    MENU_LEFT = auto()
    MENU_RIGHT = auto()
    CONFIRM = auto()
    CANCEL = auto()

    # Overworld movement
    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()

    # Audio
    VOLUME_UP = auto()
    VOLUME_DOWN = auto()


# Movement sits on WASD so the arrow keys stay free for menus and volume
DEFAULT_KEY_BINDINGS: dict[Action, list[int]] = {
    Action.MENU_LEFT: [pygame.K_LEFT, pygame.K_a],
    Action.MENU_RIGHT: [pygame.K_RIGHT, pygame.K_d],
    Action.CONFIRM: [pygame.K_RETURN, pygame.K_SPACE],
    Action.CANCEL: [pygame.K_ESCAPE],

    Action.MOVE_UP: [pygame.K_w],
    Action.MOVE_DOWN: [pygame.K_s],
    Action.MOVE_LEFT: [pygame.K_a],
    Action.MOVE_RIGHT: [pygame.K_d],

    Action.VOLUME_UP: [pygame.K_UP],
    Action.VOLUME_DOWN: [pygame.K_DOWN],
}
