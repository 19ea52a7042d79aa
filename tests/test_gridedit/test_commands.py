import pytest
from gridedit.commands import EditorCommands
from gridedit.events import EditorEvent
from gridedit.state import EditorMode


@pytest.fixture
def commands(editor_state):
    return EditorCommands(editor_state)


def test_zoom_in_and_out(commands, editor_state, repaints):
    commands.zoom_in()
    assert editor_state.camera.zoom == pytest.approx(1.25)
    commands.zoom_in()
    assert editor_state.camera.zoom == pytest.approx(1.5625)
    commands.zoom_out()
    commands.zoom_out()
    assert editor_state.camera.zoom == pytest.approx(1.0)
    assert len(repaints.events) == 4


def test_zoom_keeps_camera_position(commands, editor_state):
    editor_state.camera.x, editor_state.camera.y = 30, -20
    commands.zoom_in()
    assert (editor_state.camera.x, editor_state.camera.y) == (30, -20)


def test_toggle_play(commands, editor_state, record_events):
    recorder = record_events(EditorEvent.MODE_CHANGED)

    assert commands.toggle_play() == EditorMode.PLAY
    assert commands.toggle_play() == EditorMode.EDIT

    assert [e["mode"] for e in recorder.events] == [EditorMode.PLAY, EditorMode.EDIT]


def test_export_publishes_text(commands, controller, record_events):
    recorder = record_events(EditorEvent.SNAPSHOT_EXPORTED)
    controller.drop("k1", 0, 0)

    text = commands.export()

    assert commands.last_export == text
    assert '"assetKey": "k1"' in text
    assert recorder.events[0]["text"] == text


def test_save_to(commands, controller, tmp_path):
    controller.drop("k1", 0, 0)
    path = tmp_path / "scene.json"
    assert commands.save_to(path)
    assert path.read_text(encoding="utf-8") == commands.last_export


def test_clear_scene(commands, controller, editor_state, repaints):
    obj = controller.drop("k1", 0, 0)
    editor_state.scene.select(obj.object_id)
    repaints.clear()

    commands.clear_scene()

    assert len(editor_state.scene) == 0
    assert editor_state.scene.selected is None
    assert [e["reason"] for e in repaints.events] == ["clear"]


def test_clear_scene_in_play_mode(commands, controller, editor_state):
    controller.drop("k1", 0, 0)
    commands.toggle_play()
    commands.clear_scene()
    assert len(editor_state.scene) == 0


def test_exit_publishes_request(commands, record_events):
    recorder = record_events(EditorEvent.EXIT_REQUESTED)
    commands.exit()
    assert len(recorder.events) == 1


def test_status(commands, controller, editor_state):
    obj = controller.drop("k1", 0, 0)
    assert commands.status() == "Edit | zoom 100% | 1 objects | selected -"

    editor_state.scene.select(obj.object_id)
    commands.zoom_in()
    commands.toggle_play()
    assert commands.status() == "Play | zoom 125% | 1 objects | selected #1"
