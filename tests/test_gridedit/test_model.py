import pytest
from pydantic import ValidationError
from gridedit.events import EditorEvent
from gridedit.model import Avatar, HitKind, SceneModel, SceneObject


@pytest.fixture
def scene(registry, event_bus):
    return SceneModel(registry, grid_size=50, event_bus=event_bus)


def test_place_object_snaps_to_cell(scene):
    obj = scene.place_object("k1", 123, 77)

    assert (obj.x, obj.y, obj.w, obj.h) == (100, 50, 50, 50)
    assert obj.asset_key == "k1"
    assert scene.objects == (obj,)
    assert obj in scene


def test_place_object_negative_coordinates_floor(scene):
    obj = scene.place_object("k1", -1, -51)
    assert (obj.x, obj.y) == (-50, -100)


def test_place_unregistered_key_is_noop(scene):
    assert scene.place_object("nope", 10, 10) is None
    assert len(scene) == 0


def test_object_ids_are_unique_and_increasing(scene):
    ids = [scene.place_object("k1", 0, 0).object_id for _ in range(3)]
    assert ids == [1, 2, 3]


def test_place_publishes_event(scene, record_events):
    recorder = record_events(EditorEvent.OBJECT_PLACED)
    obj = scene.place_object("k1", 0, 0)
    assert [e["object_id"] for e in recorder.events] == [obj.object_id]


def test_rejects_non_positive_grid(registry):
    with pytest.raises(ValueError):
        SceneModel(registry, grid_size=0)


def test_select_and_clear(scene):
    obj = scene.place_object("k1", 0, 0)
    scene.select(obj.object_id)
    assert scene.selected is obj

    scene.select(999)
    assert scene.selected is None
    assert scene.selected_id is None


def test_selection_change_published_once(scene, record_events):
    obj = scene.place_object("k1", 0, 0)
    recorder = record_events(EditorEvent.SELECTION_CHANGED)

    scene.select(obj.object_id)
    scene.select(obj.object_id)
    scene.clear_selection()

    assert [e["object_id"] for e in recorder.events] == [obj.object_id, None]


def test_clear_all_resets_selection(scene, record_events):
    obj = scene.place_object("k1", 0, 0)
    scene.select(obj.object_id)
    recorder = record_events(EditorEvent.SCENE_CLEARED)

    scene.clear_all()

    assert len(scene) == 0
    assert scene.selected is None
    assert scene.get(obj.object_id) is None
    assert len(recorder.events) == 1


def test_hit_test_prefers_topmost(scene):
    bottom = scene.place_object("k1", 0, 0)
    top = scene.place_object("k1", 0, 0)

    hit = scene.find_top_object_at(25, 25, handle=8)
    assert hit.obj is top
    assert hit.kind == HitKind.DRAG
    assert bottom is not top


def test_hit_test_handle_before_body(scene):
    obj = scene.place_object("k1", 0, 0)

    hit = scene.find_top_object_at(48, 48, handle=8)
    assert hit.obj is obj
    assert hit.kind == HitKind.RESIZE

    # Corner of the body, outside the handle square
    assert scene.find_top_object_at(41, 10, handle=8).kind == HitKind.DRAG


def test_hit_test_edges_are_inclusive(scene):
    scene.place_object("k1", 0, 0)
    assert scene.find_top_object_at(0, 0, handle=8) is not None
    assert scene.find_top_object_at(50, 50, handle=8).kind == HitKind.RESIZE
    assert scene.find_top_object_at(50.01, 25, handle=8) is None


def test_invalid_objects_are_skipped_by_hit_test(scene):
    obj = scene.place_object("k1", 0, 0)
    obj.w = 0
    assert not obj.is_valid
    assert scene.find_top_object_at(0, 0, handle=8) is None
    assert obj in scene


def test_handle_size_scales_with_world_units(scene):
    scene.place_object("k1", 0, 0)
    # At zoom 4, an 8 px handle is 2 world units
    assert scene.find_top_object_at(47, 47, handle=2).kind == HitKind.DRAG
    assert scene.find_top_object_at(49, 49, handle=2).kind == HitKind.RESIZE


def test_scene_object_identity_fields_are_frozen():
    obj = SceneObject(object_id=1, asset_key="k1", x=0, y=0, w=50, h=50)
    with pytest.raises(ValidationError):
        obj.asset_key = "other"
    with pytest.raises(ValidationError):
        SceneObject(object_id=1, asset_key="k1", depth=3)


def test_avatar_defaults_and_move():
    avatar = Avatar()
    assert (avatar.x, avatar.y, avatar.size) == (100, 100, 40)
    avatar.move(-10, 20)
    assert (avatar.x, avatar.y) == (90, 120)
