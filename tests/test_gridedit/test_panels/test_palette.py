import pytest
from unittest.mock import MagicMock, patch

from gridedit.panels.palette import AssetPalettePanel, asset_texture_name


@pytest.fixture
def mock_imgui():
    with patch("gridedit.panels.palette.imgui") as imgui:
        imgui.button.return_value = False
        imgui.get_style.return_value.item_spacing.x = 4.0
        imgui.get_content_region_avail.return_value.x = 240.0
        imgui.is_item_hovered.return_value = False
        imgui.is_item_active.return_value = False
        imgui.is_mouse_dragging.return_value = False
        imgui.is_mouse_down.return_value = False
        yield imgui


@pytest.fixture
def palette(editor_state):
    pipeline = MagicMock()
    pipeline.pending_count = 0
    return AssetPalettePanel(editor_state, pipeline, MagicMock())


def test_texture_name():
    assert asset_texture_name("abc") == "asset:abc"


def test_thumbnail_per_asset(palette, mock_imgui):
    palette._render_content()
    mock_imgui.image_button.assert_called_once()
    assert mock_imgui.image_button.call_args[0][0] == "##k1"


def test_press_without_drag_does_not_start_drag(palette, mock_imgui):
    mock_imgui.is_item_active.return_value = True
    mock_imgui.is_mouse_down.return_value = True

    palette._render_content()

    assert palette.dragging_key is None


def test_drag_starts_while_button_held(palette, mock_imgui):
    mock_imgui.is_item_active.return_value = True
    mock_imgui.is_mouse_dragging.return_value = True
    mock_imgui.is_mouse_down.return_value = True

    palette._render_content()

    assert palette.dragging_key == "k1"
    assert palette.take_drag() == "k1"
    assert palette.dragging_key is None


def test_stale_drag_cleared_once_button_is_up(palette, mock_imgui):
    palette.dragging_key = "k1"

    palette._render_content()

    assert palette.dragging_key is None
    assert palette.take_drag() is None


def test_add_images_submits_picked_files(palette, mock_imgui, tmp_path):
    mock_imgui.button.return_value = True
    picked = [tmp_path / "a.png", tmp_path / "b.png"]
    with patch("gridedit.panels.palette.ask_open_images", return_value=picked):
        palette._render_content()

    assert [c.args[0] for c in palette.pipeline.submit.call_args_list] == picked
