"""
Asset registry.

Maps opaque asset keys to drawable pygame surfaces. A key is either
fully registered or absent: there is no "loading" entry, so callers
treat a missing key and a still-loading key the same way.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

import pygame

from gridedit.events import EditorEvent

if TYPE_CHECKING:
    from gridcore.core.events import EventBus

logger = logging.getLogger(__name__)


class AssetRegistry:
    """
    Key -> surface store, in registration order.

    Usage:
        registry = AssetRegistry(event_bus)
        registry.register(key, surface)
        if key in registry:
            canvas.blit(registry.get(key), (0, 0))
    """

    def __init__(self, event_bus: EventBus | None = None):
        self.event_bus = event_bus
        self._surfaces: dict[str, pygame.Surface] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._surfaces

    def __len__(self) -> int:
        return len(self._surfaces)

    def __iter__(self) -> Iterator[str]:
        return iter(self._surfaces)

    def get(self, key: str) -> pygame.Surface | None:
        """Get the drawable surface for a key, or None if not registered."""
        return self._surfaces.get(key)

    def register(self, key: str, surface: pygame.Surface) -> bool:
        """
        Register a surface under a key.

        Re-registering an existing key keeps the first surface, since
        keys are derived from content.

        Returns:
            True if the key was newly added

        Raises:
            ValueError: If the surface has zero width or height
        """
        width, height = surface.get_size()
        if width == 0 or height == 0:
            raise ValueError(f"Cannot register zero-sized asset {key!r} ({width}x{height})")

        if key in self._surfaces:
            return False

        self._surfaces[key] = surface
        logger.info(f"Registered asset {key[:12]} ({width}x{height})")
        if self.event_bus:
            self.event_bus.publish(EditorEvent.ASSET_REGISTERED, key=key, surface=surface)
        return True
