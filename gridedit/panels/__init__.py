"""Sidebar panels."""

from gridedit.panels.base import Panel, PanelManager
from gridedit.panels.palette import AssetPalettePanel, asset_texture_name
from gridedit.panels.controls import ControlsPanel
from gridedit.panels.output import OutputPanel

__all__ = [
    "Panel",
    "PanelManager",
    "AssetPalettePanel",
    "asset_texture_name",
    "ControlsPanel",
    "OutputPanel",
]
