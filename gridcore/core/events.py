"""
Typed event bus for decoupled communication.

Event types are Enum members, so publishers and subscribers agree on
names without magic strings.

Usage:
    class EditorEvent(Enum):
        REPAINT_REQUESTED = auto()

    bus.subscribe(EditorEvent.REPAINT_REQUESTED, scene.on_repaint)
    bus.publish(EditorEvent.REPAINT_REQUESTED, reason="drag")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


class EngineEvent(Enum):
    """Built-in engine events."""
    GAME_START = auto()
    GAME_QUIT = auto()
    WINDOW_RESIZED = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type (Enum member)
        data: Dictionary of event-specific data
        consumed: Whether the event has been handled
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        """Mark event as consumed (stops propagation)."""
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


@dataclass
class _Subscription:
    priority: int
    handler: Any
    weak: bool

    def resolve(self) -> EventHandler | None:
        if self.weak:
            return self.handler()
        return self.handler


class EventBus:
    """
    Central event bus for publish/subscribe messaging.

    Handlers run in priority order (highest first). Bound methods are
    held weakly by default so a destroyed panel or scene drops out of
    the bus on its own. Events published from inside a handler are
    queued and dispatched after the current one finishes.
    """

    def __init__(self):
        self._handlers: dict[Enum, list[_Subscription]] = {}
        self._event_queue: list[Event] = []
        self._is_publishing = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        weak: bool = True,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback function(event: Event)
            priority: Higher priority handlers are called first
            weak: Hold the handler through a weak reference
        """
        if weak:
            target = WeakMethod(handler) if hasattr(handler, "__self__") else ref(handler)
        else:
            target = handler

        subscriptions = self._handlers.setdefault(event_type, [])
        subscriptions.append(_Subscription(priority, target, weak))
        # Stable sort keeps subscription order among equal priorities
        subscriptions.sort(key=lambda s: -s.priority)

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """Remove a handler from an event type."""
        if event_type not in self._handlers:
            return
        self._handlers[event_type] = [
            s for s in self._handlers[event_type] if s.resolve() != handler
        ]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event.

        Returns:
            The Event object (check .consumed to see if it was handled)
        """
        event = Event(type=event_type, data=data)
        if self._is_publishing:
            self._event_queue.append(event)
        else:
            self._dispatch(event)
        return event

    def clear(self, event_type: Enum | None = None) -> None:
        """Clear handlers for one event type, or all of them."""
        if event_type is None:
            self._handlers.clear()
        else:
            self._handlers.pop(event_type, None)

    def _dispatch(self, event: Event) -> None:
        subscriptions = self._handlers.get(event.type)
        if subscriptions:
            self._is_publishing = True
            try:
                dead = []
                for subscription in list(subscriptions):
                    handler = subscription.resolve()
                    if handler is None:
                        dead.append(subscription)
                        continue
                    try:
                        handler(event)
                    except Exception:
                        logger.exception("Error in event handler for %s", event.type)
                    if event.consumed:
                        break
                for subscription in dead:
                    subscriptions.remove(subscription)
            finally:
                self._is_publishing = False

        while self._event_queue and not self._is_publishing:
            self._dispatch(self._event_queue.pop(0))
