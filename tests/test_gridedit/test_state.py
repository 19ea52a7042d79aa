from gridedit.config import EditorConfig
from gridedit.interaction import IDLE
from gridedit.state import EditorMode, EditorState


def test_initial_state(registry):
    state = EditorState(registry, EditorConfig(grid_size=32, initial_zoom=2.0, avatar_x=5))

    assert state.mode == EditorMode.EDIT
    assert not state.is_playing
    assert state.interaction == IDLE
    assert state.grid_size == 32
    assert state.camera.zoom == 2.0
    assert (state.avatar.x, state.avatar.y, state.avatar.size) == (5, 100, 40)
    assert len(state.scene) == 0


def test_resize_canvas_only_repaints(editor_state, controller, repaints):
    obj = controller.drop("k1", 123, 77)
    editor_state.camera.x, editor_state.camera.y = 5, 5
    repaints.clear()

    editor_state.resize_canvas(800, 600)

    assert editor_state.canvas_size == (800, 600)
    assert (editor_state.camera.x, editor_state.camera.y, editor_state.camera.zoom) == (5, 5, 1.0)
    assert (obj.x, obj.y) == (100, 50)
    assert [e["reason"] for e in repaints.events] == ["resize"]


def test_request_repaint_without_bus(registry):
    EditorState(registry).request_repaint("noop")
