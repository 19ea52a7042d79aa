"""
Editor-specific events.

Published on the game's EventBus by the interaction layer, the asset
pipeline and the controls, and consumed by the application shell and
panels.
"""

from __future__ import annotations

from enum import Enum, auto


class EditorEvent(Enum):
    """Editor-specific events."""

    # Any state change that needs the canvas redrawn
    REPAINT_REQUESTED = auto()

    # Scene
    OBJECT_PLACED = auto()
    SELECTION_CHANGED = auto()
    SCENE_CLEARED = auto()

    # Mode
    MODE_CHANGED = auto()

    # Assets
    ASSET_REGISTERED = auto()

    # Controls
    SNAPSHOT_EXPORTED = auto()
    EXIT_REQUESTED = auto()
