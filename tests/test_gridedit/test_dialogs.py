from pathlib import Path
from unittest.mock import patch

import pytest

from gridedit import dialogs


@pytest.fixture
def tk_root():
    with patch("gridedit.dialogs.tk.Tk") as mock_tk:
        yield mock_tk.return_value


def test_ask_open_images_returns_paths(tk_root):
    with patch("gridedit.dialogs.filedialog.askopenfilenames", return_value=("/a/x.png", "/a/y.jpg")):
        result = dialogs.ask_open_images()

    assert result == [Path("/a/x.png"), Path("/a/y.jpg")]
    tk_root.withdraw.assert_called_once()
    tk_root.destroy.assert_called_once()


def test_ask_open_images_cancelled(tk_root):
    with patch("gridedit.dialogs.filedialog.askopenfilenames", return_value=()):
        assert dialogs.ask_open_images() == []


def test_ask_save_file(tk_root):
    with patch("gridedit.dialogs.filedialog.asksaveasfilename", return_value="/tmp/scene.json") as ask:
        assert dialogs.ask_save_file() == Path("/tmp/scene.json")

    assert ask.call_args.kwargs["defaultextension"] == ".json"
    assert ask.call_args.kwargs["initialfile"] == "scene.json"


def test_ask_save_file_cancelled(tk_root):
    with patch("gridedit.dialogs.filedialog.asksaveasfilename", return_value=""):
        assert dialogs.ask_save_file() is None
    tk_root.destroy.assert_called_once()


def test_root_destroyed_when_dialog_raises(tk_root):
    with patch("gridedit.dialogs.messagebox.showerror", side_effect=RuntimeError("boom")):
        with pytest.raises(RuntimeError):
            dialogs.show_error("Save Failed", "nope")
    tk_root.destroy.assert_called_once()
