"""
gridcore

Engine layer for the grid scene editor: window and loop, typed events,
key bindings, camera transforms and texture uploads.

Quick Start:
    from gridcore import Game, GameConfig, Scene

    class MyScene(Scene):
        def update(self, dt: float) -> None:
            pass

        def render(self, alpha: float) -> None:
            pass

    game = Game(GameConfig(title="My Tool"))
    game.set_scene(MyScene(game))
    game.run()
"""

__version__ = "0.1.0"

from gridcore.core import (
    Game,
    GameConfig,
    Scene,
    EventBus,
    Event,
    EngineEvent,
    Action,
)
from gridcore.input import KeyBindings
from gridcore.graphics import Camera, snap_to_grid

__all__ = [
    "Game",
    "GameConfig",
    "Scene",
    "EventBus",
    "Event",
    "EngineEvent",
    "Action",
    "KeyBindings",
    "Camera",
    "snap_to_grid",
]
