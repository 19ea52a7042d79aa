"""
Output panel.

Shows the most recent snapshot export as read-only text and can write
it to a file.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from imgui_bundle import imgui

from gridedit.dialogs import ask_save_file, show_error
from gridedit.panels.base import Panel

if TYPE_CHECKING:
    from gridedit.commands import EditorCommands
    from gridedit.state import EditorState


class OutputPanel(Panel):

    weight = 1.5

    def __init__(self, state: EditorState, commands: EditorCommands):
        super().__init__(state)
        self.commands = commands

    @property
    def title(self) -> str:
        return "Output"

    def _render_content(self) -> None:
        if imgui.button("Save As..."):
            self._save_as()

        imgui.input_text_multiline(
            "##snapshot",
            self.commands.last_export,
            imgui.ImVec2(-1, -1),
            imgui.InputTextFlags_.read_only,
        )

    def _save_as(self) -> None:
        path = ask_save_file()
        if path is None:
            return
        if not self.commands.save_to(path):
            show_error("Save Failed", f"Could not write {path}")
