"""
Tile RPG Engine

A small pygame engine for tile-based RPGs: ECS world, scene stack,
fixed-timestep loop, action-based input and audio.

Quick Start:
    from engine.core import Game, GameConfig, Scene

    class MyScene(Scene):
        def update(self, dt: float) -> None:
            pass

    config = GameConfig(title="My Game", width=1280, height=720)
    game = Game(config)
    game.scene_manager.push(MyScene(game))
    game.run()
"""

__version__ = "0.1.0"
__author__ = "Developer"

# Re-export core components for convenience
from engine.core import (
    Game,
    GameConfig,
    Scene,
    SceneManager,
    Entity,
    Component,
    register_component,
    System,
    RenderSystem,
    World,
    EventBus,
    Event,
    EngineEvent,
    Action,
)

from engine.input import InputHandler

__all__ = [
    # Core
    "Game",
    "GameConfig",
    "Scene",
    "SceneManager",
    # ECS
    "Entity",
    "Component",
    "register_component",
    "System",
    "RenderSystem",
    "World",
    # Events
    "EventBus",
    "Event",
    "EngineEvent",
    # Input
    "InputHandler",
    "Action",
]
