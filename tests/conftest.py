import os
import sys
import pytest
from unittest.mock import MagicMock, patch

# Headless SDL before pygame is imported anywhere
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

# Ensure gridcore/gridedit can be imported from a source checkout
sys.path.append(os.getcwd())

import pygame


RED = (255, 0, 0, 255)


def solid_surface(color=RED, size=(128, 128)) -> pygame.Surface:
    """RGBA surface filled with one color."""
    surface = pygame.Surface(size, pygame.SRCALPHA, 32)
    surface.fill(color)
    return surface


class EventRecorder:
    """Collects published events of the given types."""

    def __init__(self, bus, *event_types):
        self.events = []
        for event_type in event_types:
            bus.subscribe(event_type, self._record)

    def _record(self, event):
        self.events.append(event)

    def of(self, event_type):
        return [e for e in self.events if e.type == event_type]

    def clear(self):
        self.events.clear()


@pytest.fixture
def mock_moderngl():
    """Mock moderngl context for graphics tests."""
    with patch('moderngl.create_context') as mock_create:
        ctx = MagicMock()
        mock_create.return_value = ctx
        yield ctx


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from gridcore.core.events import EventBus
    return EventBus()


@pytest.fixture
def registry(event_bus):
    """Registry with one red asset under key 'k1'."""
    from gridedit.assets.registry import AssetRegistry

    registry = AssetRegistry(event_bus)
    registry.register("k1", solid_surface())
    return registry


@pytest.fixture
def editor_state(registry, event_bus):
    """Editor state over a 400x300 canvas, default config."""
    from gridedit.state import EditorState
    return EditorState(registry, event_bus=event_bus, canvas_size=(400, 300))


@pytest.fixture
def controller(editor_state):
    from gridedit.interaction import InteractionController
    return InteractionController(editor_state)


@pytest.fixture
def repaints(event_bus):
    """Recorder for repaint requests."""
    from gridedit.events import EditorEvent
    return EventRecorder(event_bus, EditorEvent.REPAINT_REQUESTED)


@pytest.fixture
def record_events(event_bus):
    """Factory: record_events(*types) -> EventRecorder on the shared bus."""
    def factory(*event_types):
        return EventRecorder(event_bus, *event_types)
    return factory


@pytest.fixture
def make_surface():
    """Factory for solid RGBA surfaces."""
    return solid_surface
