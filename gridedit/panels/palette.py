"""
Asset palette panel.

Shows a thumbnail for every registered asset. Dragging a thumbnail
starts a drag; the editor scene ends it on mouse release and, when the
pointer is over the canvas, drops the asset key there.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from imgui_bundle import imgui

from gridedit.dialogs import ask_open_images
from gridedit.panels.base import Panel

if TYPE_CHECKING:
    from gridcore.graphics.texture import TextureManager
    from gridedit.assets.pipeline import AssetPipeline
    from gridedit.state import EditorState

logger = logging.getLogger(__name__)


def asset_texture_name(key: str) -> str:
    """TextureManager name for an asset's thumbnail."""
    return f"asset:{key}"


class AssetPalettePanel(Panel):
    """Thumbnail grid of registered assets with an import button."""

    weight = 2.0

    def __init__(
        self,
        state: EditorState,
        pipeline: AssetPipeline,
        textures: TextureManager,
        thumbnail_size: int = 64,
    ):
        super().__init__(state)
        self.pipeline = pipeline
        self.textures = textures
        self.thumbnail_size = thumbnail_size
        self.dragging_key: str | None = None

    @property
    def title(self) -> str:
        return "Assets"

    def take_drag(self) -> str | None:
        """End the current thumbnail drag and return its key."""
        key, self.dragging_key = self.dragging_key, None
        return key

    def _render_content(self) -> None:
        if imgui.button("Add Images..."):
            self._add_images()

        pending = self.pipeline.pending_count
        if pending:
            imgui.same_line()
            imgui.text_disabled(f"loading {pending}")

        imgui.separator()

        registry = self.state.registry
        if len(registry) == 0:
            imgui.text_wrapped("Add images, or drop image files onto the window.")
            return

        size = imgui.ImVec2(self.thumbnail_size, self.thumbnail_size)
        spacing = imgui.get_style().item_spacing.x
        columns = max(1, int(imgui.get_content_region_avail().x // (self.thumbnail_size + spacing)))

        shown = 0
        for key in registry:
            texture = self.textures.get(asset_texture_name(key))
            if texture is None:
                continue

            if shown % columns:
                imgui.same_line()
            imgui.image_button(f"##{key}", texture.glo, size)
            shown += 1

            if imgui.is_item_hovered():
                imgui.set_tooltip(key[:12])
            if imgui.is_item_active() and imgui.is_mouse_dragging(imgui.MouseButton_.left):
                self.dragging_key = key

        # A release the scene never saw ends the drag here
        if self.dragging_key is not None and not imgui.is_mouse_down(imgui.MouseButton_.left):
            self.dragging_key = None

        if self.dragging_key is not None:
            self._render_drag_preview()

    def _render_drag_preview(self) -> None:
        texture = self.textures.get(asset_texture_name(self.dragging_key))
        if texture is None:
            return
        mouse = imgui.get_mouse_pos()
        half = self.thumbnail_size / 4
        imgui.get_foreground_draw_list().add_image(
            texture.glo,
            imgui.ImVec2(mouse.x - half, mouse.y - half),
            imgui.ImVec2(mouse.x + half, mouse.y + half),
        )

    def _add_images(self) -> None:
        paths = ask_open_images()
        for path in paths:
            self.pipeline.submit(path)
        if paths:
            logger.info(f"Importing {len(paths)} images")
