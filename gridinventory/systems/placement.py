"""
Placement engine - moving and merging tiles into slots.

A drop is resolved in two steps: try the slot the tile was dropped
on, and if that does not take the whole stack, send the tile (or its
leftover) back to the slot the drag started from. The origin slot was
vacated by the drag, so it can always take the tile back; when it
cannot, state has been corrupted elsewhere and we fail loudly.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from gridengine.core.errors import PlacementConsistencyError, SlotNotRegisteredError
from gridengine.core.events import EventBus, InventoryEvent
from gridinventory.components.inventory import Position, Slot, Tile
from gridinventory.systems.registry import SlotRegistry
from gridinventory.systems.selector import SlotSelector
from gridinventory.systems.stacking import StackOperations

logger = logging.getLogger(__name__)


class PlacementResult(Enum):
    """Outcome of placing a tile into one slot."""
    FAILED = auto()            # Occupied by a different item
    MOVED_TO_EMPTY = auto()    # Slot was empty, caller assigns the tile
    MERGED_PARTIALLY = auto()  # Some quantity moved, leftover stays on the tile
    MERGED_FULLY = auto()      # Everything moved, tile destroyed


@dataclass
class PlacementReport:
    """
    Where a dragged tile ended up.

    Attributes:
        slot: Slot that finally received the tile or its quantity
        result: Outcome at that slot
        returned_to_origin: True if the drop target did not take everything
        attempted_result: Outcome at the drop target
    """
    slot: Slot
    result: PlacementResult
    returned_to_origin: bool = False
    attempted_result: Optional[PlacementResult] = None


class PlacementEngine:
    """
    Decides where tiles land and applies the result.

    All public operations hold one re-entrant lock: merging and
    reassigning an occupant are not atomic on their own.

    Usage:
        engine = PlacementEngine(registry, event_bus=bus)
        report = engine.place_from_drag(tile, origin_slot)
        if report and report.returned_to_origin:
            play_bounce_animation(tile)
    """

    def __init__(
        self,
        registry: SlotRegistry,
        stacking: Optional[StackOperations] = None,
        selector: Optional[SlotSelector] = None,
        event_bus: Optional[EventBus] = None,
        snap_to_best_slot: bool = False,
    ):
        self.registry = registry
        self.stacking = stacking or StackOperations()
        self.selector = selector or SlotSelector(registry)
        self.event_bus = event_bus
        self.snap_to_best_slot = snap_to_best_slot
        self._lock = threading.RLock()

    def try_place(self, target_slot: Slot, tile: Tile) -> PlacementResult:
        """
        Attempt to put ``tile`` into ``target_slot``.

        An empty slot is only reported, not assigned. An occupied slot
        gets a merge attempt; a fully merged tile is destroyed and
        any slot still holding it is freed.
        """
        with self._lock:
            incoming = tile.stack
            if incoming is None or target_slot.tile is tile:
                return PlacementResult.FAILED

            occupant = target_slot.stack
            if occupant is None:
                return PlacementResult.MOVED_TO_EMPTY

            if not self.stacking.attempt_merge(occupant, incoming):
                return PlacementResult.FAILED

            if incoming.quantity == 0:
                source = self.registry.slot_with_tile(tile)
                if source is not None:
                    source.tile = None
                tile.destroy()
                result = PlacementResult.MERGED_FULLY
            else:
                result = PlacementResult.MERGED_PARTIALLY

            self._publish(
                InventoryEvent.TILE_MERGED,
                slot=target_slot,
                tile=tile,
                fully=result is PlacementResult.MERGED_FULLY,
            )
            return result

    def place_from_drag(
        self,
        tile: Tile,
        origin_slot: Slot,
        drop_point: Optional[Position] = None,
    ) -> Optional[PlacementReport]:
        """
        Resolve a drop.

        Args:
            tile: The dragged tile (already released from its slot)
            origin_slot: Slot the drag started from
            drop_point: Where it was dropped (defaults to tile.position)

        Returns:
            Report of where the tile ended up, or None if the tile was
            stale (destroyed, or already sitting in a slot)

        Raises:
            SlotNotRegisteredError: origin_slot is not in the registry
            PlacementConsistencyError: the origin slot refused the tile
        """
        with self._lock:
            if tile.is_destroyed:
                logger.debug(f"Ignoring drop of destroyed tile {tile.name}")
                return None

            if origin_slot not in self.registry:
                raise SlotNotRegisteredError(origin_slot.name)

            if self.registry.slot_with_tile(tile) is not None:
                logger.debug(f"Ignoring drop of already placed tile {tile.name}")
                return None

            point = drop_point if drop_point is not None else tile.position
            target = self._select_target(tile, origin_slot, point)

            result = self.try_place(target, tile)

            if result is PlacementResult.MOVED_TO_EMPTY:
                self._assign(target, tile)
                return PlacementReport(target, result, attempted_result=result)

            if result is PlacementResult.MERGED_FULLY:
                return PlacementReport(target, result, attempted_result=result)

            # Failed or partial: leftovers go home
            return self._snap_back(tile, origin_slot, result)

    def return_to_origin(self, tile: Tile, origin_slot: Slot) -> Optional[PlacementReport]:
        """
        Put a dragged tile straight back into ``origin_slot``.

        Unlike a drop, no slot search is done, so a slot sharing the
        origin's position cannot take the tile instead.

        Returns:
            Report of the return, or None if the tile was stale

        Raises:
            SlotNotRegisteredError: origin_slot is not in the registry
            PlacementConsistencyError: the origin slot refused the tile
        """
        with self._lock:
            if tile.is_destroyed or self.registry.slot_with_tile(tile) is not None:
                return None

            if origin_slot not in self.registry:
                raise SlotNotRegisteredError(origin_slot.name)

            return self._snap_back(tile, origin_slot, None)

    def place_from_spawn(self, tile: Tile) -> Optional[Slot]:
        """
        Put a newly created tile into the last empty slot.

        Filling from the end makes new items appear from the top-left
        of a grid registered bottom-right first.

        Returns:
            The slot used, or None if the inventory is full (the tile
            is destroyed)
        """
        with self._lock:
            if tile.is_destroyed:
                return None

            empty = self.registry.empty_slots()
            if not empty:
                logger.warning(
                    f"Tried to place spawned tile {tile.name} into an empty slot but found none!"
                )
                tile.destroy()
                self._publish(InventoryEvent.TILE_DISCARDED, tile=tile)
                return None

            slot = empty[-1]
            self._assign(slot, tile)
            return slot

    def release_slot_from_tile(self, tile: Tile) -> Optional[Slot]:
        """
        Empty the slot holding ``tile``.

        Returns:
            The released slot, or None if no slot held the tile
        """
        with self._lock:
            slot = self.registry.slot_with_tile(tile)
            if slot is None:
                logger.error(f"Could not find a slot containing {tile.name}")
                return None

            slot.tile = None
            return slot

    def destroy_tile(self, tile: Tile) -> None:
        """Delete a tile (trash bin), freeing its slot if it has one."""
        with self._lock:
            slot = self.registry.slot_with_tile(tile)
            if slot is not None:
                slot.tile = None
            tile.destroy()
            self._publish(InventoryEvent.TILE_DESTROYED, tile=tile, slot=slot)

    def empty_all_slots(self) -> int:
        """
        Destroy every occupant.

        Returns:
            Number of tiles removed
        """
        with self._lock:
            removed = 0
            for slot in self.registry:
                if slot.tile is not None:
                    tile = slot.tile
                    slot.tile = None
                    tile.destroy()
                    self._publish(InventoryEvent.TILE_DESTROYED, tile=tile, slot=slot)
                    removed += 1
            return removed

    def _select_target(self, tile: Tile, origin_slot: Slot, point: Position) -> Slot:
        """Slot the drop is attempted at."""
        if self.snap_to_best_slot:
            return self.selector.select_best_slot(tile.stack, point) or origin_slot

        # Closest slot period; validity is decided by try_place
        return self.registry.closest_slot(point)

    def _snap_back(
        self,
        tile: Tile,
        origin_slot: Slot,
        attempted: Optional[PlacementResult],
    ) -> PlacementReport:
        """Return a tile (or its leftover) to the slot it came from."""
        result = self.try_place(origin_slot, tile)

        if result is PlacementResult.MOVED_TO_EMPTY:
            origin_slot.tile = tile
        elif result is not PlacementResult.MERGED_FULLY:
            message = (
                f"Could not fully return tile {tile.name} to its fallback slot "
                f"{origin_slot.name} ({result.name})"
            )
            logger.error(message)
            raise PlacementConsistencyError(message)

        self._publish(InventoryEvent.TILE_RETURNED, slot=origin_slot, tile=tile)
        return PlacementReport(
            origin_slot,
            result,
            returned_to_origin=True,
            attempted_result=attempted,
        )

    def _assign(self, slot: Slot, tile: Tile) -> None:
        slot.tile = tile
        self._publish(InventoryEvent.TILE_PLACED, slot=slot, tile=tile)

    def _publish(self, event_type: InventoryEvent, **data) -> None:
        if self.event_bus:
            self.event_bus.publish(event_type, **data)
