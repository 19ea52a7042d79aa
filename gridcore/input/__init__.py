"""Input handling module."""

from gridcore.input.bindings import KeyBindings

__all__ = [
    "KeyBindings",
]
