import numpy as np
import pygame
import pytest
from gridedit.assets.registry import AssetRegistry
from gridedit.mode import ModeController
from gridedit.commands import EditorCommands
from gridedit.render import RenderTheme, SceneRenderer, clamp_rect, grid_line_positions

WHITE = (255, 255, 255)
GRID = (204, 204, 204)
RED = (255, 0, 0)
BLACK = (0, 0, 0)
BLUE = (0, 0, 255)


@pytest.fixture
def canvas():
    return pygame.Surface((400, 300), 0, 32)


@pytest.fixture
def renderer():
    return SceneRenderer()


def pixel(surface, x, y):
    return tuple(surface.get_at((x, y)))[:3]


def near(color, expected, tolerance=4):
    """Smoothscaled pixels may be off by a few levels per channel."""
    return all(abs(a - b) <= tolerance for a, b in zip(color, expected))


def test_grid_line_positions():
    assert list(grid_line_positions(0, 50, 200)) == [0, 50, 100, 150]
    assert list(grid_line_positions(-10, 50, 200)) == [40, 90, 140, 190]
    assert len(grid_line_positions(0, 1.5, 200)) == 0


def test_background_and_grid(renderer, canvas, editor_state):
    renderer.render(canvas, editor_state)

    assert pixel(canvas, 25, 25) == WHITE
    assert pixel(canvas, 50, 25) == GRID
    assert pixel(canvas, 25, 100) == GRID


def test_grid_follows_camera(renderer, canvas, editor_state):
    editor_state.camera.x, editor_state.camera.y = 10, 0
    renderer.render(canvas, editor_state)

    assert pixel(canvas, 40, 25) == GRID
    assert pixel(canvas, 50, 25) == WHITE


def test_grid_skipped_when_too_dense(renderer, canvas, editor_state):
    editor_state.camera.zoom = 0.01
    renderer.render(canvas, editor_state)
    assert pixel(canvas, 0, 0) == WHITE


def test_object_drawn_in_screen_space(renderer, canvas, editor_state, controller):
    controller.drop("k1", 123, 77)
    renderer.render(canvas, editor_state)
    assert near(pixel(canvas, 125, 75), RED)

    editor_state.camera.zoom = 2.0
    renderer.render(canvas, editor_state)
    assert near(pixel(canvas, 250, 150), RED)


def test_object_larger_than_canvas(renderer, canvas, editor_state, controller):
    controller.drop("k1", 0, 0)
    editor_state.camera.zoom = 100.0
    renderer.render(canvas, editor_state)

    assert near(pixel(canvas, 200, 150), RED)
    assert near(pixel(canvas, 399, 299), RED)


def test_offscreen_object_is_skipped(renderer, canvas, editor_state, controller):
    controller.drop("k1", 10, 10)
    editor_state.camera.x, editor_state.camera.y = 1000, 1000
    renderer.render(canvas, editor_state)
    assert pixel(canvas, 25, 25) == WHITE


def test_invalid_object_not_drawn(renderer, canvas, editor_state, controller):
    obj = controller.drop("k1", 123, 77)
    obj.w = -5
    renderer.render(canvas, editor_state)
    assert pixel(canvas, 125, 75) == WHITE


def test_missing_asset_skipped(renderer, canvas, editor_state, controller):
    controller.drop("k1", 123, 77)
    editor_state.registry = AssetRegistry()
    renderer.render(canvas, editor_state)
    assert pixel(canvas, 125, 75) == WHITE


def test_selection_outline_and_handle(renderer, canvas, editor_state, controller, make_surface):
    editor_state.registry.register("green", make_surface((0, 255, 0, 255)))
    obj = controller.drop("green", 123, 77)
    editor_state.scene.select(obj.object_id)
    renderer.render(canvas, editor_state)

    # 2 px outline on the object's edge
    assert pixel(canvas, 100, 75) == RED
    assert pixel(canvas, 101, 75) == RED
    assert near(pixel(canvas, 103, 75), (0, 255, 0))

    # 8 px white handle with a black border at the bottom-right
    assert pixel(canvas, 145, 95) == WHITE
    assert pixel(canvas, 142, 95) == BLACK
    assert pixel(canvas, 149, 99) == BLACK


def test_avatar_only_in_play_mode(renderer, canvas, editor_state):
    renderer.render(canvas, editor_state)
    assert pixel(canvas, 120, 120) == WHITE

    ModeController(editor_state).toggle_play()
    renderer.render(canvas, editor_state)
    assert pixel(canvas, 120, 120) == BLUE
    assert pixel(canvas, 145, 120) == WHITE


def test_avatar_drawn_over_objects(renderer, canvas, editor_state, controller):
    controller.drop("k1", 110, 110)
    ModeController(editor_state).toggle_play()
    renderer.render(canvas, editor_state)
    assert pixel(canvas, 120, 120) == BLUE


def test_render_does_not_mutate_state(renderer, canvas, editor_state, controller):
    obj = controller.drop("k1", 123, 77)
    editor_state.scene.select(obj.object_id)
    before = (obj.model_dump(), editor_state.camera.x, editor_state.camera.zoom)

    renderer.render(canvas, editor_state)

    assert (obj.model_dump(), editor_state.camera.x, editor_state.camera.zoom) == before


def test_custom_theme(canvas, editor_state):
    SceneRenderer(RenderTheme(background=(10, 20, 30))).render(canvas, editor_state)
    assert pixel(canvas, 25, 25) == (10, 20, 30)


def test_grid_positions_are_numpy():
    assert isinstance(grid_line_positions(0, 50, 200), np.ndarray)


def test_grid_positions_empty_when_not_finite():
    assert len(grid_line_positions(float("nan"), 50, 200)) == 0
    assert len(grid_line_positions(0, float("inf"), 200)) == 0


def test_clamp_rect():
    bounds = pygame.Rect(0, 0, 400, 300)

    assert clamp_rect(10, 20, 30, 40, bounds) == pygame.Rect(10, 20, 30, 40)
    assert clamp_rect(-1e30, -1e30, 2e30, 2e30, bounds) == pygame.Rect(0, 0, 400, 300)
    assert clamp_rect(-1e30, 5, 2e30, 10, bounds, margin=10) == pygame.Rect(-10, 5, 420, 10)
    assert clamp_rect(500, 20, 30, 40, bounds) is None
    assert clamp_rect(-50, 20, 50, 40, bounds) is None
    assert clamp_rect(float("inf"), 0, 10, 10, bounds) is None


def test_repeated_zoom_in_keeps_rendering(renderer, canvas, editor_state, controller):
    obj = controller.drop("k1", 123, 77)
    editor_state.scene.select(obj.object_id)
    commands = EditorCommands(editor_state)
    commands.toggle_play()

    for _ in range(200):
        commands.zoom_in()
        renderer.render(canvas, editor_state)

    # Camera origin sits left of the object; everything is far off-canvas
    assert pixel(canvas, 200, 150) == WHITE


def test_zoomed_into_selected_object_fills_canvas(renderer, canvas, editor_state, controller):
    obj = controller.drop("k1", 123, 77)
    editor_state.scene.select(obj.object_id)
    editor_state.camera.x, editor_state.camera.y = 110, 60

    commands = EditorCommands(editor_state)
    for _ in range(200):
        commands.zoom_in()
        renderer.render(canvas, editor_state)

    # Outline and handle are clamped off-canvas; only the image shows
    assert near(pixel(canvas, 0, 0), RED)
    assert near(pixel(canvas, 399, 299), RED)


def test_repeated_zoom_out_keeps_rendering(renderer, canvas, editor_state, controller):
    obj = controller.drop("k1", 123, 77)
    editor_state.scene.select(obj.object_id)

    commands = EditorCommands(editor_state)
    for _ in range(200):
        commands.zoom_out()
        renderer.render(canvas, editor_state)

    assert pixel(canvas, 200, 150) == WHITE
