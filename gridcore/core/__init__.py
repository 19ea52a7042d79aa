"""
Core engine module.

Exports:
- Game, GameConfig: Window, loop and configuration
- Scene: Scene base class
- EventBus, Event, EngineEvent: Event system
- Action: Input actions
"""

from gridcore.core.game import Game, GameConfig
from gridcore.core.scene import Scene
from gridcore.core.events import EventBus, Event, EngineEvent
from gridcore.core.actions import Action

__all__ = [
    "Game",
    "GameConfig",
    "Scene",
    "EventBus",
    "Event",
    "EngineEvent",
    "Action",
]
