"""
Editor state aggregate.

Everything the interaction layer mutates and the renderer reads lives
on one EditorState: camera, scene objects and selection, avatar, mode
and the current interaction. Nothing is kept in module globals.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING

from gridcore.graphics.camera import Camera
from gridedit.config import EditorConfig
from gridedit.events import EditorEvent
from gridedit.interaction import IDLE, InteractionState
from gridedit.model import Avatar, SceneModel

if TYPE_CHECKING:
    from gridcore.core.events import EventBus
    from gridedit.assets.registry import AssetRegistry


class EditorMode(Enum):
    """Editor operation modes."""
    EDIT = auto()  # Pointer and keys edit objects
    PLAY = auto()  # Keys move the avatar


class EditorState:
    """Single owner of all mutable editor state."""

    def __init__(
        self,
        registry: AssetRegistry,
        config: EditorConfig | None = None,
        event_bus: EventBus | None = None,
        canvas_size: tuple[int, int] = (1020, 720),
    ):
        self.config = config or EditorConfig()
        self.registry = registry
        self.event_bus = event_bus

        self.camera = Camera(canvas_size[0], canvas_size[1], zoom=self.config.initial_zoom)
        self.scene = SceneModel(registry, self.config.grid_size, event_bus)
        self.avatar = Avatar(
            x=self.config.avatar_x,
            y=self.config.avatar_y,
            size=self.config.avatar_size,
        )
        self.mode = EditorMode.EDIT
        self.interaction: InteractionState = IDLE

    @property
    def grid_size(self) -> float:
        return self.scene.grid_size

    @property
    def is_playing(self) -> bool:
        return self.mode == EditorMode.PLAY

    @property
    def canvas_size(self) -> tuple[int, int]:
        return int(self.camera.view_width), int(self.camera.view_height)

    def resize_canvas(self, width: int, height: int) -> None:
        """Record a new canvas size. Camera and objects are not reflowed."""
        self.camera.resize(width, height)
        self.request_repaint("resize")

    def request_repaint(self, reason: str = "") -> None:
        """Ask the shell to redraw the canvas now."""
        if self.event_bus:
            self.event_bus.publish(EditorEvent.REPAINT_REQUESTED, reason=reason)
