"""
Controls surface.

Argument-free commands behind the sidebar buttons. Each one is a
single shot: calling it twice simply applies it twice.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from gridedit.events import EditorEvent
from gridedit.export import export_snapshot, write_snapshot
from gridedit.mode import ModeController

if TYPE_CHECKING:
    from gridedit.state import EditorMode, EditorState

logger = logging.getLogger(__name__)


class EditorCommands:
    """Zoom, mode, export, clear and exit commands over an EditorState."""

    def __init__(self, state: EditorState, mode: ModeController | None = None):
        self.state = state
        self.mode = mode or ModeController(state)
        self.last_export: str = ""

    def zoom_in(self) -> None:
        self.state.camera.zoom_by(self.state.config.zoom_step)
        self.state.request_repaint("zoom")

    def zoom_out(self) -> None:
        self.state.camera.zoom_by(1 / self.state.config.zoom_step)
        self.state.request_repaint("zoom")

    def toggle_play(self) -> EditorMode:
        return self.mode.toggle_play()

    def export(self) -> str:
        """Snapshot the object list and hand the text to the output panel."""
        self.last_export = export_snapshot(self.state.scene)
        logger.info(f"Exported {len(self.state.scene)} objects")
        if self.state.event_bus:
            self.state.event_bus.publish(EditorEvent.SNAPSHOT_EXPORTED, text=self.last_export)
        return self.last_export

    def save_to(self, path: str | Path) -> bool:
        """Export and write the snapshot to a file."""
        return write_snapshot(path, self.export())

    def clear_scene(self) -> None:
        self.state.scene.clear_all()
        self.state.request_repaint("clear")

    def status(self) -> str:
        """One-line summary for the controls panel."""
        state = self.state
        selected = state.scene.selected_id
        return (
            f"{state.mode.name.title()} | "
            f"zoom {state.camera.zoom * 100:.0f}% | "
            f"{len(state.scene)} objects | "
            f"selected {'#' + str(selected) if selected is not None else '-'}"
        )

    def exit(self) -> None:
        logger.info("Exit requested")
        if self.state.event_bus:
            self.state.event_bus.publish(EditorEvent.EXIT_REQUESTED)
