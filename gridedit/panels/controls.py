"""Controls panel: zoom, mode, save, clear and exit buttons."""

from __future__ import annotations

from typing import TYPE_CHECKING

from imgui_bundle import imgui

from gridedit.panels.base import Panel

if TYPE_CHECKING:
    from gridedit.commands import EditorCommands
    from gridedit.state import EditorState


class ControlsPanel(Panel):

    def __init__(self, state: EditorState, commands: EditorCommands):
        super().__init__(state)
        self.commands = commands

    @property
    def title(self) -> str:
        return "Controls"

    def _render_content(self) -> None:
        commands = self.commands

        if imgui.button("Zoom In"):
            commands.zoom_in()
        imgui.same_line()
        if imgui.button("Zoom Out"):
            commands.zoom_out()

        if imgui.button("Edit Mode" if self.state.is_playing else "Play Mode"):
            commands.toggle_play()

        if imgui.button("Save"):
            commands.export()
        imgui.same_line()
        if imgui.button("Clear"):
            commands.clear_scene()
        imgui.same_line()
        if imgui.button("Exit"):
            commands.exit()

        imgui.separator()
        imgui.text_wrapped(commands.status())
        if self.state.is_playing:
            imgui.text_disabled("W A S D moves the avatar")
        else:
            imgui.text_disabled("Alt+drag pans, arrows nudge, +/- resize")
