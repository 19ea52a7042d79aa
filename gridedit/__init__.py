"""
gridedit

A grid-snapped 2D scene editor: import images, place them on an
infinite grid, drag, resize and nudge them, preview with a movable
avatar, and export the layout as JSON.

Run it with:
    python -m gridedit [config.json]

The model and interaction layers work without a window:

    from gridedit import AssetRegistry, EditorState, InteractionController

    state = EditorState(AssetRegistry())
    controller = InteractionController(state)
"""

from gridedit.assets import AssetPipeline, AssetRegistry, AssetWatcher
from gridedit.commands import EditorCommands
from gridedit.config import EditorConfig, load_config
from gridedit.errors import AssetLoadError
from gridedit.events import EditorEvent
from gridedit.export import export_snapshot, validate_snapshot, write_snapshot
from gridedit.interaction import (
    IDLE,
    DraggingObject,
    Idle,
    InteractionController,
    InteractionState,
    PanningCamera,
    ResizingObject,
)
from gridedit.mode import ModeController
from gridedit.model import Avatar, HitKind, HitResult, SceneModel, SceneObject
from gridedit.render import RenderTheme, SceneRenderer
from gridedit.state import EditorMode, EditorState

__version__ = "0.1.0"

__all__ = [
    "AssetPipeline",
    "AssetRegistry",
    "AssetWatcher",
    "AssetLoadError",
    "EditorCommands",
    "EditorConfig",
    "load_config",
    "EditorEvent",
    "export_snapshot",
    "validate_snapshot",
    "write_snapshot",
    "IDLE",
    "Idle",
    "PanningCamera",
    "DraggingObject",
    "ResizingObject",
    "InteractionState",
    "InteractionController",
    "ModeController",
    "Avatar",
    "HitKind",
    "HitResult",
    "SceneModel",
    "SceneObject",
    "RenderTheme",
    "SceneRenderer",
    "EditorMode",
    "EditorState",
]
