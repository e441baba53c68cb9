"""
Inventory manager - wires the inventory systems together.
"""

from __future__ import annotations

import logging
from typing import Optional

from gridengine.core.config import InventoryConfig
from gridengine.core.events import EventBus
from gridinventory.components.inventory import ItemStack, Position, Slot, Tile
from gridinventory.inventory.items import ItemCatalog
from gridinventory.save.manager import SaveManager
from gridinventory.save.repository import InventoryRepository
from gridinventory.systems.drag import DragController
from gridinventory.systems.placement import PlacementEngine, PlacementReport
from gridinventory.systems.registry import SlotRegistry
from gridinventory.systems.selector import SlotSelector
from gridinventory.systems.stacking import StackOperations

logger = logging.getLogger(__name__)


class InventoryManager:
    """
    One inventory: its slots and the services acting on them.

    Every service is created here and handed its collaborators, so
    several inventories can live side by side.

    Usage:
        inventory = InventoryManager(catalog, config=InventoryConfig(save_path=tmp))
        for i in range(8):
            inventory.register_slot(Slot(f"slot_{i}", (i, 0)))
        inventory.spawn_item("Material_Wood", 5)

        dragged = inventory.drag.begin_drag(tile, split_requested=True)
        inventory.drag.update_position((3.2, 0.1))
        inventory.drag.finish_drag()

        await inventory.save_manager.save_inventory()
    """

    def __init__(
        self,
        catalog: ItemCatalog,
        config: Optional[InventoryConfig] = None,
        event_bus: Optional[EventBus] = None,
        repository: Optional[InventoryRepository] = None,
    ):
        self.config = config or InventoryConfig()
        self.catalog = catalog
        self.event_bus = event_bus or EventBus()

        self.registry = SlotRegistry(self.event_bus)
        self.stacking = StackOperations()
        self.selector = SlotSelector(self.registry)
        self.engine = PlacementEngine(
            self.registry,
            stacking=self.stacking,
            selector=self.selector,
            event_bus=self.event_bus,
            snap_to_best_slot=self.config.snap_to_best_slot,
        )
        self.drag = DragController(self.engine, self.stacking, self.event_bus)

        self.repository = repository or InventoryRepository(
            self.config.save_file,
            validate_checksum=self.config.validate_checksum,
        )
        self.save_manager = SaveManager(
            self.registry,
            self.engine,
            self.catalog,
            self.repository,
            self.event_bus,
            on_reset=self.drag.abandon_drag,
        )

    def register_slot(self, slot: Slot) -> bool:
        return self.registry.register(slot)

    def spawn_item(self, item_id: str, quantity: int = 1) -> Optional[Tile]:
        """
        Create a stack of an item and put it in the inventory.

        A quantity above the item's max stack size is clamped.

        Returns:
            The placed tile, or None if the quantity was not positive or
            there was no empty slot

        Raises:
            ItemNotFoundError: Unknown item
        """
        item = self.catalog.lookup_item(item_id)

        if quantity <= 0:
            logger.warning(f"Refusing to spawn {item.id} with quantity {quantity}")
            return None

        if quantity > item.max_stack:
            logger.warning(
                f"Spawning a tile of {item.id} but requested quantity exceeds max stack size, "
                f"spawning with max stack size instead"
            )
            quantity = item.max_stack

        tile = Tile(ItemStack(item, quantity), name=f"{item.id}_tile")
        if self.engine.place_from_spawn(tile) is None:
            return None
        return tile

    def drop_tile(
        self,
        tile: Tile,
        origin_slot: Slot,
        drop_point: Optional[Position] = None,
    ) -> Optional[PlacementReport]:
        """Resolve a drop reported by the presentation layer."""
        return self.engine.place_from_drag(tile, origin_slot, drop_point)

    def clear(self) -> int:
        """Remove every item, including one that is being dragged."""
        self.drag.abandon_drag()
        return self.engine.empty_all_slots()

    def count_item(self, item_id: str) -> int:
        """Total quantity of an item across all slots."""
        return sum(
            slot.stack.quantity for slot in self.registry.occupied_slots()
            if slot.stack is not None and slot.stack.item_id == item_id
        )
