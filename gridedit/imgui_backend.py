"""
ImGui backend for Pygame + ModernGL.

Feeds pygame input to Dear ImGui (imgui-bundle) and renders its draw
data with ModernGL. Image widgets may reference any texture held by a
TextureManager; draw commands bind textures by OpenGL name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

import moderngl
import numpy as np
import pygame
from imgui_bundle import imgui

if TYPE_CHECKING:
    from gridcore.graphics.texture import TextureManager


_MOUSE_BUTTONS = {
    1: imgui.MouseButton_.left,
    2: imgui.MouseButton_.middle,
    3: imgui.MouseButton_.right,
}

# Keys ImGui needs for widget focus and text editing
_KEY_MAP = {
    pygame.K_TAB: imgui.Key.tab,
    pygame.K_LEFT: imgui.Key.left_arrow,
    pygame.K_RIGHT: imgui.Key.right_arrow,
    pygame.K_UP: imgui.Key.up_arrow,
    pygame.K_DOWN: imgui.Key.down_arrow,
    pygame.K_PAGEUP: imgui.Key.page_up,
    pygame.K_PAGEDOWN: imgui.Key.page_down,
    pygame.K_HOME: imgui.Key.home,
    pygame.K_END: imgui.Key.end,
    pygame.K_DELETE: imgui.Key.delete,
    pygame.K_BACKSPACE: imgui.Key.backspace,
    pygame.K_SPACE: imgui.Key.space,
    pygame.K_RETURN: imgui.Key.enter,
    pygame.K_ESCAPE: imgui.Key.escape,
    pygame.K_a: imgui.Key.a,
    pygame.K_c: imgui.Key.c,
    pygame.K_v: imgui.Key.v,
    pygame.K_x: imgui.Key.x,
}

_MODIFIERS = (
    (imgui.Key.mod_ctrl, pygame.KMOD_CTRL),
    (imgui.Key.mod_shift, pygame.KMOD_SHIFT),
    (imgui.Key.mod_alt, pygame.KMOD_ALT),
)


class ImGuiRenderer:
    """
    ImGui context plus a ModernGL renderer for its draw lists.

    Usage:
        imgui_renderer = ImGuiRenderer(ctx, (1280, 720), textures)

        # per event
        captured = imgui_renderer.process_event(event)

        # per frame
        imgui_renderer.new_frame(dt)
        ...  # widgets
        imgui_renderer.render()
    """

    VERTEX_SHADER = """
        #version 330 core

        uniform mat4 u_projection;
        in vec2 in_pos;
        in vec2 in_uv;
        in vec4 in_color;
        out vec2 v_uv;
        out vec4 v_color;

        void main() {
            v_uv = in_uv;
            v_color = in_color;
            gl_Position = u_projection * vec4(in_pos, 0.0, 1.0);
        }
    """

    FRAGMENT_SHADER = """
        #version 330 core

        uniform sampler2D u_texture;
        in vec2 v_uv;
        in vec4 v_color;
        out vec4 out_color;

        void main() {
            out_color = v_color * texture(u_texture, v_uv);
        }
    """

    def __init__(
        self,
        ctx: moderngl.Context,
        display_size: tuple[int, int],
        textures: TextureManager | None = None,
    ):
        self.ctx = ctx
        self.textures = textures

        imgui.create_context()
        self.io = imgui.get_io()
        self.io.display_framebuffer_scale = imgui.ImVec2(1.0, 1.0)
        self.resize(*display_size)

        self.program = ctx.program(
            vertex_shader=self.VERTEX_SHADER,
            fragment_shader=self.FRAGMENT_SHADER,
        )
        self.program['u_texture'].value = 0
        self.font_texture = self._create_font_texture()

        self.vbo = ctx.buffer(reserve=65536)
        self.ibo = ctx.buffer(reserve=65536)
        self.vao = ctx.vertex_array(
            self.program,
            [(self.vbo, '2f 2f 4f1', 'in_pos', 'in_uv', 'in_color')],
            index_buffer=self.ibo,
            index_element_size=4,
        )

        self._event_handlers: dict[int, Callable[[pygame.event.Event], bool]] = {
            pygame.MOUSEMOTION: self._on_mouse_motion,
            pygame.MOUSEBUTTONDOWN: self._on_mouse_button,
            pygame.MOUSEBUTTONUP: self._on_mouse_button,
            pygame.MOUSEWHEEL: self._on_mouse_wheel,
            pygame.KEYDOWN: self._on_key,
            pygame.KEYUP: self._on_key,
            pygame.TEXTINPUT: self._on_text,
        }

    def _create_font_texture(self) -> moderngl.Texture:
        pixels, width, height, _ = self.io.fonts.get_tex_data_as_rgba32()
        texture = self.ctx.texture((width, height), 4, bytes(pixels))
        texture.filter = (moderngl.LINEAR, moderngl.LINEAR)
        self.io.fonts.tex_id = texture.glo
        return texture

    # Input

    def process_event(self, event: pygame.event.Event) -> bool:
        """
        Forward a pygame event to ImGui.

        Returns:
            True if ImGui wants to capture this event
        """
        handler = self._event_handlers.get(event.type)
        if handler is None:
            return False
        return handler(event)

    def _on_mouse_motion(self, event: pygame.event.Event) -> bool:
        self.io.add_mouse_pos_event(float(event.pos[0]), float(event.pos[1]))
        return self.io.want_capture_mouse

    def _on_mouse_button(self, event: pygame.event.Event) -> bool:
        button = _MOUSE_BUTTONS.get(event.button)
        if button is not None:
            self.io.add_mouse_button_event(button, event.type == pygame.MOUSEBUTTONDOWN)
        return self.io.want_capture_mouse

    def _on_mouse_wheel(self, event: pygame.event.Event) -> bool:
        self.io.add_mouse_wheel_event(float(event.x), float(event.y))
        return self.io.want_capture_mouse

    def _on_key(self, event: pygame.event.Event) -> bool:
        key = _KEY_MAP.get(event.key)
        if key is not None:
            self.io.add_key_event(key, event.type == pygame.KEYDOWN)
        for imgui_mod, pygame_mod in _MODIFIERS:
            self.io.add_key_event(imgui_mod, bool(event.mod & pygame_mod))
        return self.io.want_capture_keyboard

    def _on_text(self, event: pygame.event.Event) -> bool:
        self.io.add_input_characters_utf8(event.text)
        return self.io.want_text_input

    # Frame

    def new_frame(self, dt: float) -> None:
        self.io.delta_time = dt if dt > 0 else 1 / 60
        imgui.new_frame()

    def render(self) -> None:
        """Finish the ImGui frame and draw it over the current framebuffer."""
        imgui.render()
        draw_data = imgui.get_draw_data()
        if draw_data is None:
            return

        fb_height = int(draw_data.display_size.y * draw_data.framebuffer_scale.y)
        if fb_height <= 0 or draw_data.display_size.x <= 0:
            return

        self._setup_render_state()
        self.program['u_projection'].write(self._projection(draw_data))

        for cmd_list in draw_data.cmd_lists:
            self._render_draw_list(cmd_list, fb_height)

        self.ctx.disable(moderngl.SCISSOR_TEST)
        self.ctx.scissor = None

    def _setup_render_state(self) -> None:
        ctx = self.ctx
        ctx.enable(moderngl.BLEND)
        ctx.blend_func = moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA
        ctx.disable(moderngl.CULL_FACE | moderngl.DEPTH_TEST)
        ctx.enable(moderngl.SCISSOR_TEST)

    def _render_draw_list(self, cmd_list, fb_height: int) -> None:
        vertices = cmd_list.vtx_buffer.data()
        indices = cmd_list.idx_buffer.data()
        if len(vertices) > self.vbo.size:
            self.vbo.orphan(len(vertices) * 2)
        if len(indices) > self.ibo.size:
            self.ibo.orphan(len(indices) * 2)
        self.vbo.write(vertices)
        self.ibo.write(indices)

        first = 0
        for cmd in cmd_list.cmd_buffer:
            rect = cmd.clip_rect
            width = int(rect.z - rect.x)
            height = int(rect.w - rect.y)
            if width > 0 and height > 0:
                # Scissor boxes are bottom-left based
                self.ctx.scissor = (int(rect.x), int(fb_height - rect.w), width, height)
                self._bind_texture(cmd.texture_id)
                self.vao.render(moderngl.TRIANGLES, vertices=cmd.elem_count, first=first)
            first += cmd.elem_count

    def _bind_texture(self, texture_id: int) -> None:
        if not texture_id:
            return
        if texture_id == self.font_texture.glo:
            self.font_texture.use(0)
        elif self.textures is not None:
            texture = self.textures.get_by_glo(texture_id)
            if texture is not None:
                texture.use(0)

    @staticmethod
    def _projection(draw_data) -> bytes:
        """Orthographic projection from ImGui display space to clip space."""
        left = draw_data.display_pos.x
        top = draw_data.display_pos.y
        right = left + draw_data.display_size.x
        bottom = top + draw_data.display_size.y

        projection = np.array([
            [2.0 / (right - left), 0.0, 0.0, 0.0],
            [0.0, 2.0 / (top - bottom), 0.0, 0.0],
            [0.0, 0.0, -1.0, 0.0],
            [(right + left) / (left - right), (top + bottom) / (bottom - top), 0.0, 1.0],
        ], dtype='f4')
        return projection.tobytes()

    def resize(self, width: int, height: int) -> None:
        self.display_size = (width, height)
        self.io.display_size = imgui.ImVec2(width, height)

    def shutdown(self) -> None:
        self.vao.release()
        self.vbo.release()
        self.ibo.release()
        self.program.release()
        self.font_texture.release()
        imgui.destroy_context()
