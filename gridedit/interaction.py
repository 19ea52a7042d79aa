"""
Interaction state machine.

Pointer and keyboard input in edit mode drives one of four mutually
exclusive states:

    Idle ──press (Alt)────────────> PanningCamera
    Idle ──press on handle────────> ResizingObject
    Idle ──press on object────────> DraggingObject
    any  ──release────────────────> Idle

Each state is its own frozen dataclass carrying only the data it needs,
so "dragging and resizing at once" cannot be expressed. In play mode
pointer input is ignored and the keyboard moves the avatar instead.

Screen coordinates passed in here are relative to the canvas top-left.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from gridcore.core.actions import Action
from gridcore.graphics.camera import snap_to_grid
from gridcore.input.bindings import KeyBindings
from gridedit.model import HitKind

if TYPE_CHECKING:
    from gridedit.model import SceneObject
    from gridedit.state import EditorState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    """No pointer gesture in progress."""


@dataclass(frozen=True)
class PanningCamera:
    """Camera drag; the anchor is the last raw screen point seen."""
    anchor_x: float
    anchor_y: float


@dataclass(frozen=True)
class DraggingObject:
    """Object drag; the offset is the grab point relative to the object's corner."""
    object_id: int
    offset_x: float
    offset_y: float


@dataclass(frozen=True)
class ResizingObject:
    """Bottom-right handle drag."""
    object_id: int


InteractionState = Union[Idle, PanningCamera, DraggingObject, ResizingObject]

IDLE = Idle()


_NUDGES: dict[Action, tuple[int, int]] = {
    Action.NUDGE_UP: (0, -1),
    Action.NUDGE_DOWN: (0, 1),
    Action.NUDGE_LEFT: (-1, 0),
    Action.NUDGE_RIGHT: (1, 0),
}

_AVATAR_MOVES: dict[Action, tuple[int, int]] = {
    Action.AVATAR_UP: (0, -1),
    Action.AVATAR_DOWN: (0, 1),
    Action.AVATAR_LEFT: (-1, 0),
    Action.AVATAR_RIGHT: (1, 0),
}


class InteractionController:
    """
    Applies pointer, keyboard and drop input to an EditorState.

    Every state transition or mutation asks the shell for a repaint.

    Usage:
        controller = InteractionController(state)
        controller.pointer_down(120, 80, pan_modifier=False)
        controller.pointer_move(180, 140)
        controller.pointer_up()
    """

    def __init__(self, state: EditorState, bindings: KeyBindings | None = None):
        self.state = state
        self.bindings = bindings or KeyBindings()

    @property
    def current(self) -> InteractionState:
        return self.state.interaction

    # Pointer

    def pointer_down(self, screen_x: float, screen_y: float, pan_modifier: bool = False) -> None:
        """Start a gesture at a canvas point."""
        state = self.state
        if state.is_playing:
            return

        if pan_modifier:
            state.interaction = PanningCamera(screen_x, screen_y)
            state.request_repaint("pan-start")
            return

        scene = state.scene
        scene.clear_selection()

        world_x, world_y = state.camera.screen_to_world(screen_x, screen_y)
        handle = state.camera.screen_length_to_world(state.config.handle_size)
        hit = scene.find_top_object_at(world_x, world_y, handle)

        if hit is None:
            state.interaction = IDLE
        elif hit.kind == HitKind.RESIZE:
            scene.select(hit.obj.object_id)
            state.interaction = ResizingObject(hit.obj.object_id)
        else:
            scene.select(hit.obj.object_id)
            state.interaction = DraggingObject(
                hit.obj.object_id,
                world_x - hit.obj.x,
                world_y - hit.obj.y,
            )

        state.request_repaint("select")

    def pointer_move(self, screen_x: float, screen_y: float) -> None:
        """Continue the current gesture."""
        state = self.state
        if state.is_playing:
            return

        current = state.interaction
        if isinstance(current, PanningCamera):
            state.camera.pan_by_screen(screen_x - current.anchor_x, screen_y - current.anchor_y)
            state.interaction = PanningCamera(screen_x, screen_y)
            state.request_repaint("pan")

        elif isinstance(current, DraggingObject):
            obj = self._gesture_target(current.object_id)
            if obj is None:
                return
            world_x, world_y = state.camera.screen_to_world(screen_x, screen_y)
            obj.x, obj.y = snap_to_grid(
                world_x - current.offset_x,
                world_y - current.offset_y,
                state.grid_size,
            )
            state.request_repaint("drag")

        elif isinstance(current, ResizingObject):
            obj = self._gesture_target(current.object_id)
            if obj is None:
                return
            world_x, world_y = state.camera.screen_to_world(screen_x, screen_y)
            floor = state.config.min_object_size
            obj.w = max(floor, world_x - obj.x)
            obj.h = max(floor, world_y - obj.y)
            state.request_repaint("resize")

    def pointer_up(self) -> None:
        """End any gesture. Applies in both modes."""
        was_idle = isinstance(self.state.interaction, Idle)
        self.state.interaction = IDLE
        if not was_idle:
            self.state.request_repaint("release")

    def _gesture_target(self, object_id: int) -> SceneObject | None:
        obj = self.state.scene.get(object_id)
        if obj is None:
            # Scene was cleared mid-gesture
            self.state.interaction = IDLE
        return obj

    # Keyboard

    def key_down(self, key: int) -> bool:
        """
        Handle a key press.

        Returns:
            True if the key changed the scene or avatar
        """
        actions = self.bindings.resolve(key)
        if not actions:
            return False

        if self.state.is_playing:
            changed = self._move_avatar(actions)
        else:
            changed = self._edit_selected(actions)

        if changed:
            self.state.request_repaint("key")
        return changed

    def _move_avatar(self, actions: list[Action]) -> bool:
        step = self.state.config.avatar_step
        changed = False
        for action in actions:
            if action in _AVATAR_MOVES:
                dx, dy = _AVATAR_MOVES[action]
                self.state.avatar.move(dx * step, dy * step)
                changed = True
        return changed

    def _edit_selected(self, actions: list[Action]) -> bool:
        obj = self.state.scene.selected
        if obj is None:
            return False

        config = self.state.config
        grid = self.state.grid_size
        changed = False
        for action in actions:
            if action in _NUDGES:
                dx, dy = _NUDGES[action]
                obj.x += dx * grid
                obj.y += dy * grid
                changed = True
            elif action == Action.GROW:
                obj.w += config.size_step
                obj.h += config.size_step
                changed = True
            elif action == Action.SHRINK:
                obj.w = max(config.min_object_size, obj.w - config.size_step)
                obj.h = max(config.min_object_size, obj.h - config.size_step)
                changed = True
        return changed

    # Drop

    def drop(self, payload: str, screen_x: float, screen_y: float) -> SceneObject | None:
        """
        Place the asset named by a drop payload at a canvas point.

        Payloads that are not registered asset keys are ignored.
        """
        state = self.state
        if state.is_playing:
            logger.debug("Ignoring drop in play mode")
            return None

        world_x, world_y = state.camera.screen_to_world(screen_x, screen_y)
        obj = state.scene.place_object(payload.strip(), world_x, world_y)
        if obj is None:
            logger.debug(f"Ignoring drop of unregistered payload {payload[:32]!r}")
            return None

        state.request_repaint("drop")
        return obj
