"""
Typed event bus for decoupled communication.

Uses Enums for event types to prevent magic strings. Presentation
code (tile widgets, save indicators) listens here instead of being
called directly by the inventory systems.

Usage:
    # Subscribe
    event_bus.subscribe(InventoryEvent.TILE_MERGED, on_tile_merged)

    # Publish
    event_bus.publish(InventoryEvent.TILE_MERGED, slot=slot, tile=tile)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


class InventoryEvent(Enum):
    """Slot and placement events."""
    # Registry
    SLOT_REGISTERED = auto()

    # Placement
    TILE_PLACED = auto()       # Moved into an empty slot
    TILE_MERGED = auto()       # Merged (fully or partially) into an occupant
    TILE_RETURNED = auto()     # Sent back to its origin slot
    TILE_DESTROYED = auto()    # Trash / explicit delete
    TILE_DISCARDED = auto()    # Spawned with nowhere to go

    # Drag lifecycle
    DRAG_STARTED = auto()
    DRAG_FINISHED = auto()
    STACK_SPLIT = auto()


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
        """Get event data by key."""
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


# Type alias for event handlers
EventHandler = Callable[[Event], None]


@dataclass(eq=False)
class _Subscription:
    """One registered handler, possibly held through a weak reference."""
    target: Any
    priority: int = 0
    one_shot: bool = False

    @classmethod
    def create(
        cls,
        handler: EventHandler,
        priority: int,
        one_shot: bool,
        weak: bool,
    ) -> _Subscription:
        if not weak:
            target = handler
        elif hasattr(handler, '__self__'):
            target = WeakMethod(handler)
        else:
            target = ref(handler)
        return cls(target, priority, one_shot)

    def resolve(self) -> EventHandler | None:
        """The live handler, or None once a weak target was collected."""
        if isinstance(self.target, (ref, WeakMethod)):
            return self.target()
        return self.target


class EventBus:
    """
    Publish/subscribe messaging between the inventory systems and
    whatever presents them.

    Handlers run highest priority first, in subscription order within
    a priority. A handler may consume the event to stop the rest from
    seeing it. Events published from inside a handler are delivered
    after the current dispatch completes.
    """

    def __init__(self):
        self._subscriptions: dict[Enum, list[_Subscription]] = {}
        self._pending: list[Event] = []
        self._dispatching = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback function(event: Event)
            priority: Higher priority handlers are called first (default 0)
            one_shot: If True, handler is removed after first call
            weak: If True, use weak reference (handler auto-removed if deleted)
        """
        subs = self._subscriptions.setdefault(event_type, [])
        sub = _Subscription.create(handler, priority, one_shot, weak)

        position = next(
            (i for i, other in enumerate(subs) if priority > other.priority),
            len(subs),
        )
        subs.insert(position, sub)

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """Remove a handler from an event type."""
        subs = self._subscriptions.get(event_type)
        if subs is None:
            return
        subs[:] = [sub for sub in subs if sub.resolve() != handler]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event.

        Returns:
            The Event object (check .consumed to see if it was handled)
        """
        event = Event(type=event_type, data=data)

        if self._dispatching:
            self._pending.append(event)
            return event

        self._dispatch(event)
        while self._pending:
            self._dispatch(self._pending.pop(0))
        return event

    def clear(self, event_type: Enum | None = None) -> None:
        """Drop the handlers of one event type, or all of them."""
        if event_type is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(event_type, None)

    def handler_count(self, event_type: Enum) -> int:
        """Number of live handlers for an event type."""
        return sum(
            1 for sub in self._subscriptions.get(event_type, [])
            if sub.resolve() is not None
        )

    def _dispatch(self, event: Event) -> None:
        subs = self._subscriptions.get(event.type)
        if not subs:
            return

        finished: list[_Subscription] = []
        self._dispatching = True
        try:
            for sub in list(subs):
                handler = sub.resolve()
                if handler is None:
                    finished.append(sub)
                    continue

                try:
                    handler(event)
                except Exception:
                    logger.exception(f"Error in event handler for {event.type}")

                if sub.one_shot:
                    finished.append(sub)
                if event.consumed:
                    break
        finally:
            self._dispatching = False

        for sub in finished:
            if sub in subs:
                subs.remove(sub)
