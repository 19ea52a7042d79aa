"""
Native file dialogs.

Thin tkinter wrappers used by the sidebar: picking images to import
and choosing where to save a snapshot. Each call creates and destroys
its own hidden Tk root.
"""

from __future__ import annotations

import tkinter as tk
from pathlib import Path
from tkinter import filedialog, messagebox


IMAGE_FILETYPES = [
    ("Images", "*.png *.jpg *.jpeg *.bmp *.gif *.webp *.tga"),
    ("All files", "*.*"),
]

SNAPSHOT_FILETYPES = [
    ("JSON files", "*.json"),
    ("All files", "*.*"),
]


def _get_tk_root() -> tk.Tk:
    """Create a hidden, topmost Tk root for a dialog."""
    root = tk.Tk()
    root.withdraw()
    root.attributes('-topmost', True)
    return root


def ask_open_images(
    title: str = "Add Images",
    initial_dir: str | Path | None = None,
) -> list[Path]:
    """
    Show a multi-select open dialog for image files.

    Returns:
        Selected paths; empty if cancelled
    """
    root = _get_tk_root()
    try:
        filepaths = filedialog.askopenfilenames(
            title=title,
            filetypes=IMAGE_FILETYPES,
            initialdir=str(initial_dir) if initial_dir else None,
        )
        return [Path(p) for p in filepaths]
    finally:
        root.destroy()


def ask_save_file(
    title: str = "Save Snapshot",
    initial_dir: str | Path | None = None,
    initial_file: str = "scene.json",
) -> Path | None:
    """
    Show a save dialog for a snapshot file.

    Returns:
        Selected path, or None if cancelled
    """
    root = _get_tk_root()
    try:
        filepath = filedialog.asksaveasfilename(
            title=title,
            filetypes=SNAPSHOT_FILETYPES,
            initialdir=str(initial_dir) if initial_dir else None,
            defaultextension=".json",
            initialfile=initial_file,
        )
        if filepath:
            return Path(filepath)
        return None
    finally:
        root.destroy()


def show_error(title: str, message: str) -> None:
    root = _get_tk_root()
    try:
        messagebox.showerror(title, message)
    finally:
        root.destroy()
