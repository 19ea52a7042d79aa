"""
Canvas renderer.

Paints the editor state onto a pygame surface in a fixed order:

    1. background
    2. grid lines
    3. valid objects, bottom to top
    4. selection outline and resize handle
    5. avatar (play mode only)

The renderer keeps no scene state of its own; everything it draws is
read from the EditorState passed to render().
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import pygame

if TYPE_CHECKING:
    from gridedit.model import SceneObject
    from gridedit.state import EditorState

Color = tuple[int, int, int]

# Below this spacing grid lines would fill the canvas
MIN_GRID_STEP = 2.0


@dataclass
class RenderTheme:
    """Canvas colors."""
    background: Color = (255, 255, 255)
    grid: Color = (204, 204, 204)
    selection: Color = (255, 0, 0)
    selection_width: int = 2
    handle_fill: Color = (255, 255, 255)
    handle_border: Color = (0, 0, 0)
    avatar: Color = (0, 0, 255)


def grid_line_positions(offset: float, step: float, extent: float) -> np.ndarray:
    """
    Screen positions of grid lines along one axis.

    Args:
        offset: Screen position of world coordinate 0 on this axis
        step: Line spacing in pixels
        extent: Canvas length in pixels
    """
    if step < MIN_GRID_STEP or not (math.isfinite(offset) and math.isfinite(step)):
        return np.empty(0)
    return np.arange(offset % step, extent, step)


class SceneRenderer:
    """
    Stateless painter for the editor canvas.

    Usage:
        renderer = SceneRenderer()
        renderer.render(canvas_surface, state)
    """

    def __init__(self, theme: RenderTheme | None = None):
        self.theme = theme or RenderTheme()

    def render(self, surface: pygame.Surface, state: EditorState) -> None:
        surface.fill(self.theme.background)
        self._draw_grid(surface, state)
        self._draw_objects(surface, state)

        selected = state.scene.selected
        if selected is not None and selected.is_valid:
            self._draw_selection(surface, state, selected)

        if state.is_playing:
            self._draw_avatar(surface, state)

    def _draw_grid(self, surface: pygame.Surface, state: EditorState) -> None:
        camera = state.camera
        width, height = surface.get_size()
        step = state.grid_size * camera.zoom

        for x in grid_line_positions(-camera.x * camera.zoom, step, width):
            pygame.draw.line(surface, self.theme.grid, (x, 0), (x, height))
        for y in grid_line_positions(-camera.y * camera.zoom, step, height):
            pygame.draw.line(surface, self.theme.grid, (0, y), (width, y))

    def _draw_objects(self, surface: pygame.Surface, state: EditorState) -> None:
        camera = state.camera
        for obj in state.scene:
            if not obj.is_valid or not camera.is_visible(obj.x, obj.y, obj.w, obj.h):
                continue
            image = state.registry.get(obj.asset_key)
            if image is None:
                continue
            self._blit_scaled(surface, image, camera.world_to_screen(obj.x, obj.y, obj.w, obj.h))

    def _draw_selection(self, surface: pygame.Surface, state: EditorState, obj: SceneObject) -> None:
        size = int(state.config.handle_size)
        margin = size + self.theme.selection_width
        screen = state.camera.world_to_screen(obj.x, obj.y, obj.w, obj.h)
        rect = clamp_rect(*screen, surface.get_rect(), margin)
        if rect is None:
            return
        pygame.draw.rect(surface, self.theme.selection, rect, self.theme.selection_width)

        handle = pygame.Rect(rect.right - size, rect.bottom - size, size, size)
        pygame.draw.rect(surface, self.theme.handle_fill, handle)
        pygame.draw.rect(surface, self.theme.handle_border, handle, 1)

    def _draw_avatar(self, surface: pygame.Surface, state: EditorState) -> None:
        avatar = state.avatar
        camera = state.camera
        if not camera.is_visible(avatar.x, avatar.y, avatar.size, avatar.size):
            return
        screen = camera.world_to_screen(avatar.x, avatar.y, avatar.size, avatar.size)
        rect = clamp_rect(*screen, surface.get_rect())
        if rect is not None:
            pygame.draw.rect(surface, self.theme.avatar, rect)

    @staticmethod
    def _blit_scaled(
        surface: pygame.Surface,
        image: pygame.Surface,
        screen: tuple[float, float, float, float],
    ) -> None:
        """
        Draw an image stretched over a screen rectangle, scaling only the
        part that lands on the surface. Keeps high zoom levels from
        allocating surfaces far larger than the canvas.
        """
        x, y, w, h = screen
        visible = clamp_rect(x, y, w, h, surface.get_rect())
        if visible is None:
            return

        image_w, image_h = image.get_size()
        scale_x = image_w / w
        scale_y = image_h / h

        # Limited to the image before rounding; extreme zoom gives huge scales
        left = min(math.floor(max(0.0, (visible.left - x) * scale_x)), image_w - 1)
        top = min(math.floor(max(0.0, (visible.top - y) * scale_y)), image_h - 1)
        right = max(left + 1, math.ceil(min(image_w, (visible.right - x) * scale_x)))
        bottom = max(top + 1, math.ceil(min(image_h, (visible.bottom - y) * scale_y)))

        part = image.subsurface((left, top, right - left, bottom - top))
        if part.get_bitsize() in (24, 32):
            scaled = pygame.transform.smoothscale(part, visible.size)
        else:
            scaled = pygame.transform.scale(part, visible.size)
        surface.blit(scaled, visible.topleft)


def clamp_rect(
    x: float,
    y: float,
    w: float,
    h: float,
    bounds: pygame.Rect,
    margin: int = 0,
) -> pygame.Rect | None:
    """
    Integer rectangle for a float screen rectangle, limited to bounds
    grown by margin on every side.

    Returns None when the rectangle misses bounds or is not finite, so
    callers never hand pygame coordinates outside C int range.
    """
    if not all(math.isfinite(v) for v in (x, y, w, h)):
        return None
    if x + w <= bounds.left or y + h <= bounds.top or x >= bounds.right or y >= bounds.bottom:
        return None

    left = max(x, bounds.left - margin)
    top = max(y, bounds.top - margin)
    right = min(x + w, bounds.right + margin)
    bottom = min(y + h, bounds.bottom + margin)
    return _to_rect(left, top, right - left, bottom - top)


def _to_rect(x: float, y: float, w: float, h: float) -> pygame.Rect:
    left = round(x)
    top = round(y)
    return pygame.Rect(left, top, max(1, round(x + w) - left), max(1, round(y + h) - top))
