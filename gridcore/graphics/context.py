"""
ModernGL helpers.

A small wrapper around the context for compiling programs, plus a
textured quad used to put a CPU-rendered surface on screen.
"""

from __future__ import annotations

import struct

import moderngl


class GraphicsContext:
    """
    Wrapper around a ModernGL context.

    Provides:
    - Program compilation with a cache
    - Texture creation with a filter preset
    - Clearing the default framebuffer
    """

    def __init__(self, ctx: moderngl.Context):
        self.ctx = ctx
        self._program_cache: dict[str, moderngl.Program] = {}

    @property
    def screen(self) -> moderngl.Framebuffer:
        return self.ctx.screen

    def program(self, name: str, vertex_shader: str, fragment_shader: str) -> moderngl.Program:
        """Compile a program once and reuse it by name."""
        if name not in self._program_cache:
            self._program_cache[name] = self.ctx.program(
                vertex_shader=vertex_shader,
                fragment_shader=fragment_shader,
            )
        return self._program_cache[name]

    def create_texture(
        self,
        size: tuple[int, int],
        components: int = 4,
        data: bytes | None = None,
        filter: tuple[int, int] = (moderngl.NEAREST, moderngl.NEAREST),
    ) -> moderngl.Texture:
        texture = self.ctx.texture(size, components, data)
        texture.filter = filter
        return texture

    def clear(self, r: float = 0.0, g: float = 0.0, b: float = 0.0, a: float = 1.0) -> None:
        self.ctx.clear(r, g, b, a)


# Position + texcoord
VERTEX_FORMAT_2D_UV = "2f 2f"


class TexturedQuad:
    """
    Draws a texture into a pixel rectangle of the window.

    Textures are expected with their first row at the top of the image,
    as uploaded from pygame surfaces without flipping.

    Usage:
        quad = TexturedQuad(graphics)
        quad.draw(texture, (0, 0, 1020, 720), window_size=(1280, 720))
    """

    VERTEX_SHADER = """
        #version 330 core

        in vec2 in_pos;
        in vec2 in_uv;
        out vec2 v_uv;

        void main() {
            v_uv = in_uv;
            gl_Position = vec4(in_pos, 0.0, 1.0);
        }
    """

    FRAGMENT_SHADER = """
        #version 330 core

        uniform sampler2D Texture;
        in vec2 v_uv;
        out vec4 out_color;

        void main() {
            out_color = texture(Texture, v_uv);
        }
    """

    def __init__(self, graphics: GraphicsContext):
        self.graphics = graphics
        ctx = graphics.ctx
        self.program = graphics.program("textured_quad", self.VERTEX_SHADER, self.FRAGMENT_SHADER)
        self.program['Texture'].value = 0

        vertices = struct.pack('24f',
            # pos      uv
            -1, -1,    0, 1,
             1, -1,    1, 1,
             1,  1,    1, 0,
            -1, -1,    0, 1,
             1,  1,    1, 0,
            -1,  1,    0, 0,
        )
        self.vbo = ctx.buffer(vertices)
        self.vao = ctx.vertex_array(self.program, [(self.vbo, VERTEX_FORMAT_2D_UV, 'in_pos', 'in_uv')])

    def draw(
        self,
        texture: moderngl.Texture,
        rect: tuple[int, int, int, int],
        window_size: tuple[int, int],
    ) -> None:
        """
        Args:
            texture: Texture to draw
            rect: (x, y, width, height) in window pixels, top-left origin
            window_size: (width, height) of the window
        """
        ctx = self.graphics.ctx
        x, y, width, height = rect
        previous = ctx.viewport

        # GL viewports are bottom-left based
        ctx.viewport = (x, window_size[1] - y - height, width, height)
        texture.use(0)
        self.vao.render(moderngl.TRIANGLES)
        ctx.viewport = previous

    def release(self) -> None:
        self.vao.release()
        self.vbo.release()
