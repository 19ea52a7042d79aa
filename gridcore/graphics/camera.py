"""
Editor camera and coordinate transforms.

Converts between screen space (pixels relative to the canvas top-left)
and world space (scene units), and snaps world points to grid cells.

The camera position is the world point shown at the canvas origin.
Zoom is screen pixels per world unit and is deliberately left
unbounded: repeated zooming keeps multiplying or dividing it.
"""

from __future__ import annotations

import math


def snap_to_grid(world_x: float, world_y: float, grid_size: float) -> tuple[float, float]:
    """
    Snap a world point to the top-left corner of its grid cell.

    Floors toward negative infinity, so (-1, -1) snaps to
    (-grid_size, -grid_size) rather than (0, 0).
    """
    return (
        math.floor(world_x / grid_size) * grid_size,
        math.floor(world_y / grid_size) * grid_size,
    )


class Camera:
    """
    2D pan/zoom camera.

    Usage:
        camera = Camera(1020, 720)
        wx, wy = camera.screen_to_world(mouse_x, mouse_y)
        sx, sy, sw, sh = camera.world_to_screen(obj.x, obj.y, obj.w, obj.h)

        camera.pan_by_screen(-dx, 0)   # drag the view
        camera.zoom_by(1.25)
    """

    def __init__(
        self,
        view_width: float,
        view_height: float,
        zoom: float = 1.0,
        x: float = 0.0,
        y: float = 0.0,
    ):
        self.view_width = view_width
        self.view_height = view_height
        self.x = x
        self.y = y
        self._zoom = 1.0
        self.zoom = zoom

    @property
    def zoom(self) -> float:
        """Screen pixels per world unit."""
        return self._zoom

    @zoom.setter
    def zoom(self, value: float) -> None:
        if value <= 0:
            raise ValueError(f"Zoom must be positive, got {value}")
        self._zoom = value

    def resize(self, view_width: float, view_height: float) -> None:
        """Update the view size. Position and zoom are untouched."""
        self.view_width = view_width
        self.view_height = view_height

    def pan_by_screen(self, dx: float, dy: float) -> None:
        """
        Move the view content by a screen-space delta.

        Dragging the pointer right by dx pixels moves the camera left by
        dx / zoom world units, so the scene follows the pointer.
        """
        self.x -= dx / self._zoom
        self.y -= dy / self._zoom

    def zoom_by(self, factor: float) -> None:
        """Multiply the zoom. The camera position is not adjusted."""
        self.zoom = self._zoom * factor

    # Coordinate conversion

    def screen_to_world(self, screen_x: float, screen_y: float) -> tuple[float, float]:
        """Convert canvas-relative screen coordinates to world coordinates."""
        return (
            screen_x / self._zoom + self.x,
            screen_y / self._zoom + self.y,
        )

    def world_to_screen(
        self,
        world_x: float,
        world_y: float,
        width: float = 0.0,
        height: float = 0.0,
    ) -> tuple[float, float, float, float]:
        """Convert a world rectangle to a screen rectangle (x, y, w, h)."""
        return (
            (world_x - self.x) * self._zoom,
            (world_y - self.y) * self._zoom,
            width * self._zoom,
            height * self._zoom,
        )

    def screen_length_to_world(self, pixels: float) -> float:
        """Convert a screen-space length to world units at the current zoom."""
        return pixels / self._zoom

    def is_visible(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        margin: float = 0,
    ) -> bool:
        """
        Check if a world rectangle overlaps the camera view.

        Args:
            x, y: Top-left of rectangle
            width, height: Size of rectangle
            margin: Extra world-space margin around the view
        """
        view_left = self.x - margin
        view_top = self.y - margin
        view_right = self.x + self.view_width / self._zoom + margin
        view_bottom = self.y + self.view_height / self._zoom + margin

        return not (
            x + width < view_left or
            x > view_right or
            y + height < view_top or
            y > view_bottom
        )
