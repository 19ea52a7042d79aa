"""
Texture management.

Uploads pygame surfaces into ModernGL textures and keeps them keyed by
name, so UI code can refer to an image by its OpenGL texture id.
"""

from __future__ import annotations

import moderngl
import pygame


class TextureManager:
    """
    Manages surface uploads and texture lifetime.

    Features:
    - Named cache of textures
    - In-place re-upload when a surface of the same size changes
    - Lookup by OpenGL name (glo) for ImGui draw commands
    """

    def __init__(self, ctx: moderngl.Context):
        self.ctx = ctx
        self._textures: dict[str, moderngl.Texture] = {}
        self._by_glo: dict[int, moderngl.Texture] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._textures

    def get(self, name: str) -> moderngl.Texture | None:
        return self._textures.get(name)

    def get_by_glo(self, glo: int) -> moderngl.Texture | None:
        """Find a texture by its OpenGL name."""
        return self._by_glo.get(glo)

    def upload(
        self,
        name: str,
        surface: pygame.Surface,
        filter_mode: tuple[int, int] = (moderngl.LINEAR, moderngl.LINEAR),
    ) -> moderngl.Texture:
        """
        Upload a surface under a name.

        An existing texture of the same size is rewritten in place;
        a size change releases it and creates a new one.

        Returns:
            The texture holding the surface pixels
        """
        data = pygame.image.tobytes(surface, "RGBA")
        size = surface.get_size()

        texture = self._textures.get(name)
        if texture is not None and texture.size == size:
            texture.write(data)
            return texture

        if texture is not None:
            self.release(name)

        texture = self.ctx.texture(size, 4, data)
        texture.filter = filter_mode
        self._textures[name] = texture
        self._by_glo[texture.glo] = texture
        return texture

    def release(self, name: str) -> None:
        """Release one texture."""
        texture = self._textures.pop(name, None)
        if texture is not None:
            self._by_glo.pop(texture.glo, None)
            texture.release()

    def clear(self) -> None:
        """Release all textures."""
        for texture in self._textures.values():
            texture.release()
        self._textures.clear()
        self._by_glo.clear()
