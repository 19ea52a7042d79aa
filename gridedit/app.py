"""
Editor application.

EditorScene wires the editor together on top of the engine's Game:
the canvas on the left is rendered by SceneRenderer into a pygame
surface and drawn as a textured quad; the ImGui sidebar on the right
hosts the asset palette, controls and output panels.

Event routing, in order:
    1. ImGui sees every event first
    2. Keys go to the interaction controller unless ImGui wants them
    3. Mouse presses inside the canvas start gestures; moves and
       releases always reach an active gesture
    4. Palette drags end on release; over the canvas they drop the key
    5. OS file drops are imported; OS text drops are placed as keys
"""

from __future__ import annotations

import argparse
import logging
from typing import TYPE_CHECKING

import pygame

from gridcore.core import Game, GameConfig, Scene
from gridcore.graphics.context import TexturedQuad
from gridcore.graphics.texture import TextureManager
from gridedit.assets.pipeline import AssetPipeline
from gridedit.assets.registry import AssetRegistry
from gridedit.assets.watcher import AssetWatcher
from gridedit.commands import EditorCommands
from gridedit.config import EditorConfig, load_config
from gridedit.events import EditorEvent
from gridedit.imgui_backend import ImGuiRenderer
from gridedit.interaction import Idle, InteractionController
from gridedit.panels import (
    AssetPalettePanel,
    ControlsPanel,
    OutputPanel,
    PanelManager,
    asset_texture_name,
)
from gridedit.render import SceneRenderer
from gridedit.state import EditorState

if TYPE_CHECKING:
    from gridcore.core.events import Event

logger = logging.getLogger(__name__)

CANVAS_TEXTURE = "canvas"

# Mouse buttons that start gestures: left edits, middle always pans
_LEFT = 1
_MIDDLE = 2


def canvas_rect(window_size: tuple[int, int], sidebar_width: int) -> pygame.Rect:
    """The canvas area of the window: everything left of the sidebar."""
    width, height = window_size
    return pygame.Rect(0, 0, max(1, width - sidebar_width), max(1, height))


class EditorScene(Scene):
    """
    Main editor scene.

    Owns the editor state and its collaborators; GL resources (textures,
    ImGui, the canvas quad) are created in on_enter.
    """

    def __init__(self, game: Game, config: EditorConfig | None = None):
        super().__init__(game)
        self.config = config or EditorConfig()
        event_bus = game.event_bus

        rect = canvas_rect((game.width, game.height), self.config.sidebar_width)
        self.registry = AssetRegistry(event_bus)
        self.state = EditorState(self.registry, self.config, event_bus, canvas_size=rect.size)
        self.controller = InteractionController(self.state)
        self.commands = EditorCommands(self.state)
        self.renderer = SceneRenderer()
        self.pipeline = AssetPipeline(self.registry, size=self.config.thumbnail_size)
        self.asset_watcher = AssetWatcher(self.pipeline.submit)

        self.canvas = pygame.Surface(rect.size, 0, 32)

        # Created in on_enter
        self.textures: TextureManager | None = None
        self.imgui_renderer: ImGuiRenderer | None = None
        self.canvas_quad: TexturedQuad | None = None
        self.panel_manager: PanelManager | None = None
        self.palette: AssetPalettePanel | None = None

        for event_type, handler in self._subscriptions():
            event_bus.subscribe(event_type, handler)

    def _subscriptions(self):
        return (
            (EditorEvent.REPAINT_REQUESTED, self._on_repaint),
            (EditorEvent.ASSET_REGISTERED, self._on_asset_registered),
            (EditorEvent.EXIT_REQUESTED, self._on_exit_requested),
        )

    @property
    def canvas_rect(self) -> pygame.Rect:
        return pygame.Rect((0, 0), self.state.canvas_size)

    def on_enter(self) -> None:
        super().on_enter()

        self.textures = TextureManager(self.game.ctx)
        self.canvas_quad = TexturedQuad(self.game.graphics)
        self.imgui_renderer = ImGuiRenderer(
            self.game.ctx,
            (self.game.width, self.game.height),
            self.textures,
        )

        self.panel_manager = PanelManager(self.state)
        self.palette = AssetPalettePanel(self.state, self.pipeline, self.textures)
        self.panel_manager.add_panel(self.palette)
        self.panel_manager.add_panel(ControlsPanel(self.state, self.commands))
        self.panel_manager.add_panel(OutputPanel(self.state, self.commands))

        self._setup_asset_watcher()
        self.state.request_repaint("start")
        logger.info("Editor initialized")

    def on_exit(self) -> None:
        super().on_exit()
        for event_type, handler in self._subscriptions():
            self.game.event_bus.unsubscribe(event_type, handler)
        self.asset_watcher.stop()
        self.pipeline.shutdown(wait=False)

        if self.imgui_renderer:
            self.imgui_renderer.shutdown()
            self.imgui_renderer = None
        if self.canvas_quad:
            self.canvas_quad.release()
            self.canvas_quad = None
        if self.textures:
            self.textures.clear()
            self.textures = None

    def on_resize(self, width: int, height: int) -> None:
        if self.imgui_renderer:
            self.imgui_renderer.resize(width, height)
        rect = canvas_rect((width, height), self.config.sidebar_width)
        self.state.resize_canvas(rect.width, rect.height)

    def _setup_asset_watcher(self) -> None:
        for folder in self.config.asset_dirs:
            self.asset_watcher.watch(folder)
        if self.asset_watcher.watched_paths:
            self.asset_watcher.scan_existing()
            self.asset_watcher.start()

    # Events

    def handle_event(self, event: pygame.event.Event) -> bool:
        captured = False
        if self.imgui_renderer:
            captured = self.imgui_renderer.process_event(event)

        if event.type == pygame.KEYDOWN:
            if captured:
                return True
            return self.controller.key_down(event.key)

        elif event.type == pygame.MOUSEBUTTONDOWN:
            if captured or event.button not in (_LEFT, _MIDDLE):
                return captured
            if not self.canvas_rect.collidepoint(event.pos):
                return False
            pan = event.button == _MIDDLE or bool(pygame.key.get_mods() & pygame.KMOD_ALT)
            self.controller.pointer_down(event.pos[0], event.pos[1], pan_modifier=pan)
            return True

        elif event.type == pygame.MOUSEMOTION:
            if isinstance(self.controller.current, Idle):
                return captured
            self.controller.pointer_move(event.pos[0], event.pos[1])
            return True

        elif event.type == pygame.MOUSEBUTTONUP:
            if event.button not in (_LEFT, _MIDDLE):
                return captured
            self._end_palette_drag(event.pos)
            self.controller.pointer_up()
            return True

        elif event.type == pygame.DROPFILE:
            self.pipeline.submit(event.file)
            return True

        elif event.type == pygame.DROPTEXT:
            x, y = pygame.mouse.get_pos()
            if self.canvas_rect.collidepoint(x, y):
                self.controller.drop(event.text, x, y)
            return True

        return captured

    def _end_palette_drag(self, pos: tuple[int, int]) -> None:
        if self.palette is None:
            return
        key = self.palette.take_drag()
        if key is not None and self.canvas_rect.collidepoint(pos):
            self.controller.drop(key, pos[0], pos[1])

    def _on_repaint(self, event: Event) -> None:
        size = self.state.canvas_size
        if self.canvas.get_size() != size:
            self.canvas = pygame.Surface(size, 0, 32)
        self.renderer.render(self.canvas, self.state)
        if self.textures:
            self.textures.upload(CANVAS_TEXTURE, self.canvas)

    def _on_asset_registered(self, event: Event) -> None:
        if self.textures:
            self.textures.upload(asset_texture_name(event.get("key")), event.get("surface"))

    def _on_exit_requested(self, event: Event) -> None:
        self.game.quit()

    # Loop

    def update(self, dt: float) -> None:
        self.pipeline.poll()
        if self.panel_manager:
            self.panel_manager.update(dt)

    def render(self, alpha: float) -> None:
        ctx = self.game.ctx
        ctx.clear(0.15, 0.15, 0.18, 1.0)

        window_size = (self.game.width, self.game.height)
        rect = self.canvas_rect
        texture = self.textures.get(CANVAS_TEXTURE) if self.textures else None
        if self.canvas_quad and texture is not None:
            self.canvas_quad.draw(texture, (rect.x, rect.y, rect.width, rect.height), window_size)

        if self.imgui_renderer and self.panel_manager:
            self.imgui_renderer.new_frame(1 / 60)
            self.panel_manager.render(rect.width, self.config.sidebar_width, window_size[1])
            self.imgui_renderer.render()


def run_editor(config: EditorConfig | None = None) -> None:
    """Run the editor as a standalone application."""
    config = config or EditorConfig()

    game_config = GameConfig(
        title=config.window_title,
        width=config.window_width,
        height=config.window_height,
        target_fps=60,
        resizable=True,
    )

    game = Game(game_config)
    game.set_scene(EditorScene(game, config))
    game.run()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridedit",
        description="Grid-snapped 2D scene editor.",
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Optional editor config JSON.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured log level.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    config = load_config(args.config)
    if args.log_level:
        config.log_level = args.log_level

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_editor(config)
