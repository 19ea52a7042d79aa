"""
Scene base class.

A scene is the active application state driven by the game loop: it
receives pygame events, is updated once per fixed step and rendered
once per frame.

Lifecycle:
    1. __init__: Called when scene is created
    2. on_enter: Called when the game makes it current
    3. handle_event/update/render: Called while current
    4. on_exit: Called when replaced or on shutdown
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import pygame

if TYPE_CHECKING:
    from gridcore.core.game import Game


class Scene(ABC):
    """Abstract base class for application scenes."""

    def __init__(self, game: Game):
        self.game = game
        self._is_active = False

    @property
    def is_active(self) -> bool:
        return self._is_active

    def on_enter(self) -> None:
        """Called when the scene becomes current. Override to set up resources."""
        self._is_active = True

    def on_exit(self) -> None:
        """Called when the scene stops being current. Override to clean up."""
        self._is_active = False

    def on_resize(self, width: int, height: int) -> None:
        """Called when the window is resized."""
        pass

    @abstractmethod
    def update(self, dt: float) -> None:
        """
        Update scene logic.

        Args:
            dt: Delta time in seconds (fixed timestep)
        """
        pass

    @abstractmethod
    def render(self, alpha: float) -> None:
        """
        Render the scene.

        Args:
            alpha: Interpolation factor (0-1) between fixed updates
        """
        pass

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a pygame event.

        Returns:
            True if the event was consumed
        """
        return False
