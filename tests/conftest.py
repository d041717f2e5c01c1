import os
import sys
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

# Ensure engine modules can be imported
sys.path.append(os.getcwd())


@pytest.fixture(autouse=True)
def mock_pygame():
    """
    Global mock for pygame to allow headless testing.
    Autoused for all tests to prevent accidental window creation.
    """
    with patch('pygame.init'), \
         patch('pygame.display'), \
         patch('pygame.event'), \
         patch('pygame.time'), \
         patch('pygame.mixer'), \
         patch('pygame.font'), \
         patch('pygame.key'):

        import pygame
        pygame.time.get_ticks = MagicMock(return_value=0)

        yield


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from engine.core.events import EventBus
    return EventBus()


@pytest.fixture
def world(event_bus):
    """Fresh World for each test."""
    from engine.core.world import World
    return World(event_bus)


@pytest.fixture
def tuning():
    """Default gameplay tuning."""
    from ascii_rpg.config import CombatTuning
    return CombatTuning()


@pytest.fixture
def renderer(world, tuning):
    from engine.graphics.ascii import AsciiRenderer
    return AsciiRenderer(world, tuning.tile_size)


@pytest.fixture
def input_handler(event_bus):
    from engine.input.handler import InputHandler
    return InputHandler(event_bus)


class Keyboard:
    """
    Drives an InputHandler one fixed update at a time.

    tap() releases whatever the previous tick held, presses the given
    keys and runs the handler's update, so those keys read as just
    pressed for exactly one tick. Tapping a key that is still held
    first runs an idle tick so the key is seen going down again.
    idle() is a tick with no key down.
    """

    def __init__(self, handler):
        self.handler = handler
        self._held: list[int] = []

    def tap(self, *keys: int) -> None:
        import pygame
        if any(key in self._held for key in keys):
            self.idle()
        self._release()
        for key in keys:
            self.handler.process_event(SimpleNamespace(type=pygame.KEYDOWN, key=key))
        self._held = list(keys)
        self.handler.update()

    def hold(self, *keys: int) -> None:
        """Press keys and keep them down until the next tap() or idle()."""
        import pygame
        for key in keys:
            if key not in self._held:
                self.handler.process_event(SimpleNamespace(type=pygame.KEYDOWN, key=key))
                self._held.append(key)
        self.handler.update()

    def idle(self) -> None:
        self._release()
        self.handler.update()

    def _release(self) -> None:
        import pygame
        for key in self._held:
            self.handler.process_event(SimpleNamespace(type=pygame.KEYUP, key=key))
        self._held = []


@pytest.fixture
def keyboard(input_handler):
    return Keyboard(input_handler)


@pytest.fixture
def modes():
    """Stand-in ModeHost recording mode requests."""
    from ascii_rpg.modes import GameMode
    host = MagicMock()
    host.current_mode.return_value = GameMode.OVERWORLD
    return host


@pytest.fixture
def overworld_world(event_bus):
    from engine.core.world import World
    return World(event_bus)


@pytest.fixture
def player(overworld_world, tuning):
    """Player with default stats in its own overworld World."""
    from engine.graphics.ascii import AsciiRenderer
    from ascii_rpg.world.player import create_player
    return create_player(AsciiRenderer(overworld_world, tuning.tile_size), tuning)


@pytest.fixture
def make_battle(world, renderer, player, tuning, event_bus, modes, input_handler):
    """
    Factory for a battle against one enemy kind.

    Returns (context, system); the system is added to the battle World.
    """
    from ascii_rpg.battle import BattleContext, BattleSystem, spawn_enemy
    from ascii_rpg.components import EnemyKind

    def _make(kind=EnemyKind.BAT):
        enemy = spawn_enemy(renderer, tuning, kind, (0.0, -64.0))
        context = BattleContext(renderer, player, enemy, tuning, event_bus, modes)
        system = BattleSystem(context, input_handler)
        world.add_system(system)
        return context, system

    return _make
