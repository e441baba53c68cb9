"""
Inventory module - item catalog and inventory wiring.

Provides:
- Item definitions and catalog
- InventoryManager (one inventory and its services)
"""

from gridinventory.inventory.items import (
    ItemCatalog,
    ItemDefinition,
    ITEM_SCHEMA,
)
from gridinventory.inventory.manager import InventoryManager

__all__ = [
    "ItemCatalog",
    "ItemDefinition",
    "ITEM_SCHEMA",
    "InventoryManager",
]
