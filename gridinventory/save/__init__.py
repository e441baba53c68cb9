"""
Save module - inventory persistence.

Provides:
- Snapshot records (one per occupied slot)
- Async JSON repository with checksum validation
- Save/load orchestration and events
"""

from gridinventory.save.records import InventorySaveData, ItemStackData
from gridinventory.save.repository import InventoryRepository, calculate_checksum
from gridinventory.save.manager import SaveManager, SaveEvent

__all__ = [
    "InventorySaveData",
    "ItemStackData",
    "InventoryRepository",
    "calculate_checksum",
    "SaveManager",
    "SaveEvent",
]
