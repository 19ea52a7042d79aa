"""
Base classes for sidebar panels.

Panels are ImGui windows stacked top to bottom in the fixed-width
sidebar to the right of the canvas.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from imgui_bundle import imgui

if TYPE_CHECKING:
    from gridedit.state import EditorState


class Panel(ABC):
    """
    Base class for sidebar panels.

    `weight` sets the panel's share of the sidebar height.
    """

    weight: float = 1.0

    def __init__(self, state: EditorState):
        self.state = state
        self.visible = True
        self._focused = False

    @property
    @abstractmethod
    def title(self) -> str:
        """Panel window title."""
        pass

    @property
    def id(self) -> str:
        return f"###{self.__class__.__name__}"

    @property
    def is_focused(self) -> bool:
        return self._focused

    def update(self, dt: float) -> None:
        """Per-frame logic, called regardless of visibility."""
        pass

    def render(self) -> None:
        if not self.visible:
            return

        expanded, _ = imgui.begin(f"{self.title}{self.id}", None, self._get_window_flags())
        if expanded:
            self._focused = imgui.is_window_focused()
            self._render_content()
        imgui.end()

    def _get_window_flags(self) -> int:
        return (
            imgui.WindowFlags_.no_move |
            imgui.WindowFlags_.no_resize |
            imgui.WindowFlags_.no_collapse
        )

    @abstractmethod
    def _render_content(self) -> None:
        pass


class PanelManager:
    """Owns the sidebar panels and lays them out in a column."""

    def __init__(self, state: EditorState):
        self.state = state
        self.panels: list[Panel] = []
        self._panels_by_id: dict[str, Panel] = {}

    def add_panel(self, panel: Panel) -> None:
        self.panels.append(panel)
        self._panels_by_id[panel.id] = panel

    def get_panel(self, panel_id: str) -> Panel | None:
        return self._panels_by_id.get(panel_id)

    def get_panel_by_type(self, panel_type: type) -> Panel | None:
        for panel in self.panels:
            if isinstance(panel, panel_type):
                return panel
        return None

    def update(self, dt: float) -> None:
        for panel in self.panels:
            panel.update(dt)

    def render(self, x: float, width: float, height: float) -> None:
        """Render visible panels in a column starting at window x."""
        visible = [p for p in self.panels if p.visible]
        total = sum(p.weight for p in visible)
        if not visible or total <= 0:
            return

        y = 0.0
        for panel in visible:
            panel_height = height * panel.weight / total
            imgui.set_next_window_pos(imgui.ImVec2(x, y))
            imgui.set_next_window_size(imgui.ImVec2(width, panel_height))
            panel.render()
            y += panel_height
