"""Edit/play mode switching."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gridedit.events import EditorEvent
from gridedit.state import EditorMode

if TYPE_CHECKING:
    from gridedit.state import EditorState

logger = logging.getLogger(__name__)


class ModeController:
    """
    Flips the editor between edit and play mode.

    Only the mode flag changes; objects, selection and avatar are left
    as they are. Input handlers consult the flag themselves.
    """

    def __init__(self, state: EditorState):
        self.state = state

    def toggle_play(self) -> EditorMode:
        state = self.state
        state.mode = EditorMode.EDIT if state.is_playing else EditorMode.PLAY
        logger.info(f"Mode: {state.mode.name}")
        if state.event_bus:
            state.event_bus.publish(EditorEvent.MODE_CHANGED, mode=state.mode)
        state.request_repaint("mode")
        return state.mode
