"""
Slot registry - the set of known slots and proximity queries.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from gridengine.core.events import EventBus, InventoryEvent
from gridinventory.components.inventory import Position, Slot, Tile

logger = logging.getLogger(__name__)


class SlotRegistry:
    """
    All slots of one inventory, in registration order.

    Slots are compared by identity. Registration order is the
    tie-breaker for every proximity query, so results are
    deterministic for a given layout.

    Usage:
        registry = SlotRegistry()
        for i in range(20):
            registry.register(Slot(f"slot_{i}", (i % 5, i // 5)))
        target = registry.closest_slot(tile.position)
    """

    def __init__(self, event_bus: Optional[EventBus] = None):
        self._slots: list[Slot] = []
        self.event_bus = event_bus

    def register(self, slot: Slot) -> bool:
        """
        Register a slot.

        Registering the same slot twice is harmless and only logged.

        Returns:
            True if the slot was newly added
        """
        if slot in self:
            logger.warning(f"{slot.name} tried to register multiple times!")
            return False

        self._slots.append(slot)
        if self.event_bus:
            self.event_bus.publish(InventoryEvent.SLOT_REGISTERED, slot=slot)
        return True

    def nearest_slots(self, point: Position) -> list[Slot]:
        """
        All slots ordered by distance to ``point``, nearest first.

        Uses squared distance; ``sorted`` is stable so equally distant
        slots stay in registration order.
        """
        return sorted(self._slots, key=lambda slot: slot.distance_sq(point))

    def closest_slot(self, point: Position) -> Optional[Slot]:
        """The single nearest slot, or None if nothing is registered."""
        if not self._slots:
            return None
        return min(self._slots, key=lambda slot: slot.distance_sq(point))

    def slot_with_tile(self, tile: Tile) -> Optional[Slot]:
        """Slot currently holding ``tile``."""
        for slot in self._slots:
            if slot.tile is tile:
                return slot
        return None

    def empty_slots(self) -> list[Slot]:
        return [slot for slot in self._slots if slot.is_empty]

    def occupied_slots(self) -> list[Slot]:
        return [slot for slot in self._slots if not slot.is_empty]

    @property
    def slots(self) -> list[Slot]:
        """Copy of the registered slots."""
        return list(self._slots)

    def __contains__(self, slot: object) -> bool:
        return any(s is slot for s in self._slots)

    def __iter__(self) -> Iterator[Slot]:
        return iter(list(self._slots))

    def __len__(self) -> int:
        return len(self._slots)
