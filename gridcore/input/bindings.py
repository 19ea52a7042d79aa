"""
Key bindings with action-based lookup.

Translates raw pygame key codes into semantic Actions. The editor is
event-driven (one action per key press), so there is no per-frame
pressed-state tracking here: a KEYDOWN is resolved and handled once.
"""

from __future__ import annotations

from gridcore.core.actions import Action, DEFAULT_KEY_BINDINGS


class KeyBindings:
    """
    Action -> keys mapping with a reverse key -> actions index.

    Usage:
        bindings = KeyBindings()
        for action in bindings.resolve(event.key):
            ...
    """

    def __init__(self, bindings: dict[Action, list[int]] | None = None):
        source = bindings if bindings is not None else DEFAULT_KEY_BINDINGS
        self._reverse_key_bindings: dict[int, list[Action]] = {}
        for action, keys in source.items():
            for key in keys:
                self._reverse_key_bindings.setdefault(key, []).append(action)

    def resolve(self, key: int) -> list[Action]:
        """Get every action bound to a key (empty if unbound)."""
        return list(self._reverse_key_bindings.get(key, ()))
