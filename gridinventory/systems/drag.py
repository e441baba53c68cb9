"""
Drag controller - the begin/move/finish lifecycle of one drag gesture.

Pointer tracking and rendering stay with the presentation layer; it
reports where the tile is and whether the split modifier was held.

Usage:
    dragged = drag.begin_drag(tile, split_requested=shift_held)
    drag.update_position(pointer_world_pos)
    report = drag.finish_drag(over_trash=pointer_over_trash)
"""

from __future__ import annotations

import logging
from typing import Optional

from gridengine.core.events import EventBus, InventoryEvent
from gridinventory.components.inventory import Position, Slot, Tile
from gridinventory.systems.placement import PlacementEngine, PlacementReport
from gridinventory.systems.stacking import StackOperations

logger = logging.getLogger(__name__)


class DragController:
    """
    Tracks the single active drag.

    Only one drag can be active at a time; the tile being dragged is
    out of every slot until the drag finishes or is cancelled.
    """

    def __init__(
        self,
        engine: PlacementEngine,
        stacking: Optional[StackOperations] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.engine = engine
        self.stacking = stacking or engine.stacking
        self.event_bus = event_bus
        self._current_tile: Optional[Tile] = None
        self._origin: Optional[Slot] = None

    @property
    def is_dragging(self) -> bool:
        return self._current_tile is not None

    @property
    def current_tile(self) -> Optional[Tile]:
        return self._current_tile

    @property
    def origin_slot(self) -> Optional[Slot]:
        return self._origin

    def begin_drag(self, tile: Tile, split_requested: bool = False) -> Optional[Tile]:
        """
        Pick up a tile from its slot.

        With ``split_requested`` and a stack of two or more, half the
        stack is lifted onto a new tile and the original stays put.

        Returns:
            The tile now being dragged, or None if ``tile`` is not in
            any slot
        """
        if self._current_tile is not None:
            raise RuntimeError(
                f"Cannot drag {tile.name} while {self._current_tile.name} is being dragged"
            )

        origin = self.engine.registry.slot_with_tile(tile)
        if origin is None or tile.stack is None:
            logger.warning(f"Tried to drag {tile.name} which is not in any slot")
            return None

        split_stack = None
        if split_requested:
            split_stack = self.stacking.attempt_split(tile.stack)

        if split_stack is not None:
            dragged = Tile(split_stack, position=tile.position)
            self._publish(InventoryEvent.STACK_SPLIT, source=tile, tile=dragged, slot=origin)
        else:
            self.engine.release_slot_from_tile(tile)
            dragged = tile

        self._current_tile = dragged
        self._origin = origin
        self._publish(InventoryEvent.DRAG_STARTED, tile=dragged, slot=origin)
        return dragged

    def update_position(self, point: Position) -> None:
        """Move the dragged tile."""
        if self._current_tile is None:
            return
        self._current_tile.position = tuple(point)

    def finish_drag(self, over_trash: bool = False) -> Optional[PlacementReport]:
        """
        Drop the dragged tile where it currently is.

        Args:
            over_trash: Released above the trash bin; the tile is deleted

        Returns:
            Placement report, or None when nothing was placed
        """
        tile, origin = self._current_tile, self._origin
        if tile is None or origin is None:
            return None

        try:
            if over_trash:
                self.engine.destroy_tile(tile)
                report = None
            else:
                report = self.engine.place_from_drag(tile, origin)
        finally:
            # Get ready to drag another item
            self._current_tile = None
            self._origin = None

        self._publish(InventoryEvent.DRAG_FINISHED, tile=tile, report=report)
        return report

    def cancel_drag(self) -> Optional[PlacementReport]:
        """Put the dragged tile back into the slot it came from."""
        tile, origin = self._current_tile, self._origin
        if tile is None or origin is None:
            return None

        try:
            report = self.engine.return_to_origin(tile, origin)
        finally:
            self._current_tile = None
            self._origin = None

        self._publish(InventoryEvent.DRAG_FINISHED, tile=tile, report=report)
        return report

    def abandon_drag(self) -> Optional[Tile]:
        """
        Throw away the dragged tile because the inventory was reset.

        The tile is destroyed, so a drop reported for it later is
        ignored.

        Returns:
            The abandoned tile, or None if nothing was being dragged
        """
        tile = self._current_tile
        self._current_tile = None
        self._origin = None
        if tile is None:
            return None

        logger.info(f"Abandoning drag of {tile.name} after an inventory reset")
        self.engine.destroy_tile(tile)
        self._publish(InventoryEvent.DRAG_FINISHED, tile=tile, report=None)
        return tile

    def _publish(self, event_type: InventoryEvent, **data) -> None:
        if self.event_bus:
            self.event_bus.publish(event_type, **data)
