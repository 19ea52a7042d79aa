"""
Core Game class.

Owns the window (pygame + ModernGL), the event bus and the current
scene. Scene updates advance in fixed steps; rendering happens once
per frame with the leftover fraction of a step as alpha.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import moderngl
import pygame

from gridcore.core.events import EngineEvent, EventBus
from gridcore.core.scene import Scene
from gridcore.graphics.context import GraphicsContext

logger = logging.getLogger(__name__)

# Longest frame fed to the accumulator, in seconds
MAX_FRAME_TIME = 0.25


@dataclass
class GameConfig:
    """Window and loop configuration."""
    title: str = "Grid Editor"
    width: int = 1280
    height: int = 720
    target_fps: int = 60
    fixed_timestep: float = 1 / 60
    max_frame_skip: int = 5
    resizable: bool = True


def _open_gl_window(config: GameConfig) -> pygame.Surface:
    """Open a window with a core-profile OpenGL 3.3 context."""
    pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MAJOR_VERSION, 3)
    pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MINOR_VERSION, 3)
    pygame.display.gl_set_attribute(pygame.GL_CONTEXT_PROFILE_MASK, pygame.GL_CONTEXT_PROFILE_CORE)

    flags = pygame.OPENGL | pygame.DOUBLEBUF
    if config.resizable:
        flags |= pygame.RESIZABLE

    screen = pygame.display.set_mode((config.width, config.height), flags)
    pygame.display.set_caption(config.title)
    return screen


class Game:
    """
    Window, loop and scene host.

    Usage:
        game = Game(GameConfig(title="Editor"))
        game.set_scene(EditorScene(game))
        game.run()
    """

    def __init__(self, config: GameConfig | None = None):
        self.config = config or GameConfig()
        self._running = False

        pygame.init()
        self.screen = _open_gl_window(self.config)

        self.ctx = moderngl.create_context()
        self.ctx.enable(moderngl.BLEND)
        self.ctx.blend_func = moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA
        self.graphics = GraphicsContext(self.ctx)

        self.event_bus = EventBus()
        self.scene: Scene | None = None

        self._clock = pygame.time.Clock()
        self._accumulator = 0.0
        self._last_time = time.perf_counter()

    @property
    def width(self) -> int:
        return self.screen.get_width()

    @property
    def height(self) -> int:
        return self.screen.get_height()

    @property
    def fps(self) -> float:
        return self._clock.get_fps()

    def set_scene(self, scene: Scene) -> None:
        """Make a scene current, exiting the previous one."""
        if self.scene is not None:
            self.scene.on_exit()
        self.scene = scene
        scene.on_enter()

    def run(self) -> None:
        """Run the loop until quit() is called."""
        logger.info(f"Starting loop at {self.config.target_fps} fps")
        self._running = True
        self._last_time = time.perf_counter()
        self.event_bus.publish(EngineEvent.GAME_START)

        while self._running:
            self._process_events()
            self._advance()
            self._render(self._accumulator / self.config.fixed_timestep)
            self._clock.tick(self.config.target_fps)

        self._shutdown()

    def quit(self) -> None:
        """Request shutdown at the end of the current frame."""
        self._running = False

    def _advance(self) -> None:
        """Run as many fixed updates as the elapsed time allows."""
        now = time.perf_counter()
        self._accumulator += min(now - self._last_time, MAX_FRAME_TIME)
        self._last_time = now

        step = self.config.fixed_timestep
        for _ in range(self.config.max_frame_skip):
            if self._accumulator < step:
                return
            if self.scene is not None:
                self.scene.update(step)
            self._accumulator -= step
        # Too far behind; drop the backlog
        self._accumulator = 0.0

    def _process_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.quit()
            elif event.type == pygame.VIDEORESIZE:
                self._on_resize(event.w, event.h)
            elif self.scene is not None:
                self.scene.handle_event(event)

    def _render(self, alpha: float) -> None:
        self.graphics.clear()
        if self.scene is not None:
            self.scene.render(alpha)
        pygame.display.flip()

    def _on_resize(self, width: int, height: int) -> None:
        self.ctx.viewport = (0, 0, width, height)
        if self.scene is not None:
            self.scene.on_resize(width, height)
        self.event_bus.publish(EngineEvent.WINDOW_RESIZED, width=width, height=height)

    def _shutdown(self) -> None:
        logger.info("Shutting down")
        self.event_bus.publish(EngineEvent.GAME_QUIT)
        if self.scene is not None:
            self.scene.on_exit()
            self.scene = None
        self.event_bus.clear()
        pygame.quit()
