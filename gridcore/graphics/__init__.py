"""Graphics module: camera transforms, texture uploads and GL helpers."""

from gridcore.graphics.camera import Camera, snap_to_grid
from gridcore.graphics.context import GraphicsContext, TexturedQuad
from gridcore.graphics.texture import TextureManager

__all__ = [
    "Camera",
    "snap_to_grid",
    "GraphicsContext",
    "TexturedQuad",
    "TextureManager",
]
