"""
Save/Load system - inventory persistence.

Provides:
- Snapshot of slot contents
- Reconstruction from a snapshot via the item catalog
- Async save/load through an InventoryRepository
- Event publishing for save/load operations
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Optional

from gridengine.core.errors import ItemNotFoundError, SaveDataError
from gridengine.core.events import EventBus
from gridinventory.components.inventory import ItemStack, Tile
from gridinventory.save.records import InventorySaveData, ItemStackData
from gridinventory.save.repository import InventoryRepository
from gridinventory.systems.placement import PlacementEngine
from gridinventory.systems.registry import SlotRegistry

if TYPE_CHECKING:
    from gridinventory.inventory.items import ItemCatalog, ItemDefinition

logger = logging.getLogger(__name__)


class SaveEvent(Enum):
    """Save system events."""
    SAVE_STARTED = auto()
    SAVE_COMPLETED = auto()
    SAVE_FAILED = auto()
    LOAD_STARTED = auto()
    LOAD_COMPLETED = auto()
    LOAD_FAILED = auto()


class SaveManager:
    """
    Manages saving and loading the inventory.

    Slot positions are not restored: loaded stacks are spawned into
    empty slots like any new item. Only the set of (item, quantity)
    pairs survives a round trip.

    Usage:
        save_mgr = SaveManager(registry, engine, catalog, repository, event_bus)
        await save_mgr.save_inventory()
        await save_mgr.load_inventory()
    """

    def __init__(
        self,
        registry: SlotRegistry,
        engine: PlacementEngine,
        catalog: ItemCatalog,
        repository: InventoryRepository,
        event_bus: Optional[EventBus] = None,
        on_reset: Optional[Callable[[], None]] = None,
    ):
        self.registry = registry
        self.engine = engine
        self.catalog = catalog
        self.repository = repository
        self.event_bus = event_bus
        # Called before the slots are emptied for a reload
        self.on_reset = on_reset

    def snapshot(self) -> InventorySaveData:
        """Capture every occupied slot, in registry order."""
        return InventorySaveData(
            item_stacks=[
                ItemStackData(item_id=slot.stack.item_id, quantity=slot.stack.quantity)
                for slot in self.registry.occupied_slots()
                if slot.stack is not None
            ],
        )

    def reconstruct(self, data: InventorySaveData) -> int:
        """
        Replace the inventory contents with a snapshot.

        Every item is resolved before anything is cleared, so a bad
        save leaves the current inventory untouched.

        Returns:
            Number of stacks placed

        Raises:
            ItemNotFoundError: A record names an unknown item
        """
        resolved: list[tuple[ItemDefinition, int]] = [
            (self.catalog.lookup_item(record.item_id), record.quantity)
            for record in data.item_stacks
        ]

        if self.on_reset is not None:
            self.on_reset()
        self.engine.empty_all_slots()

        placed = 0
        expected = 0
        for item, quantity in resolved:
            if quantity == 0:
                logger.warning(f"Skipping empty stack of {item.id} in save data")
                continue
            if quantity > item.max_stack:
                logger.warning(
                    f"Saved stack of {item.id} exceeds max stack size "
                    f"({quantity} > {item.max_stack}), clamping"
                )
                quantity = item.max_stack

            expected += 1
            tile = Tile(ItemStack(item, quantity), name=f"{item.id}_tile")
            if self.engine.place_from_spawn(tile) is not None:
                placed += 1

        if placed < expected:
            logger.warning(f"Reconstructed {placed} of {expected} saved stacks")
        return placed

    async def save_inventory(self) -> bool:
        """
        Snapshot the inventory and write it out.

        Returns:
            True if the save was written
        """
        self._publish(SaveEvent.SAVE_STARTED)

        data = self.snapshot()
        try:
            await self.repository.save_inventory(data)
        except OSError as e:
            logger.error(f"Failed to save {self.repository.save_file}: {e}")
            self._publish(SaveEvent.SAVE_FAILED, error=str(e))
            return False

        logger.info("Inventory Saved Successfully!")
        self._publish(SaveEvent.SAVE_COMPLETED, stacks=len(data.item_stacks))
        return True

    async def load_inventory(self) -> Optional[InventorySaveData]:
        """
        Load the save file and rebuild the inventory from it.

        Returns:
            The loaded snapshot, or None if there was nothing usable to load

        Raises:
            ItemNotFoundError: The save names an item missing from the catalog
        """
        logger.info("Loading Inventory...")
        self._publish(SaveEvent.LOAD_STARTED)

        try:
            data = await self.repository.load_inventory()
        except SaveDataError as e:
            logger.error(str(e))
            self._publish(SaveEvent.LOAD_FAILED, error=str(e))
            return None

        if data is None:
            self._publish(SaveEvent.LOAD_FAILED, error="No save file")
            return None

        try:
            self.reconstruct(data)
        except ItemNotFoundError as e:
            self._publish(SaveEvent.LOAD_FAILED, error=str(e))
            raise

        self._publish(SaveEvent.LOAD_COMPLETED, stacks=len(data.item_stacks))
        return data

    def check_save_exists(self) -> bool:
        """Log and report whether a save file is available."""
        if self.repository.file_exists():
            logger.info("Inventory data file found. Ready to load inventory.")
            return True

        logger.warning("No inventory data file found.")
        return False

    def _publish(self, event_type: SaveEvent, **data) -> None:
        if self.event_bus:
            self.event_bus.publish(event_type, **data)
