"""
Core engine module.

Exports:
- EventBus, Event, InventoryEvent: Event system
- DataModel: Serializable record base
- InventoryConfig, setup_logging: Configuration
- Error types
"""

from gridengine.core.events import EventBus, Event, InventoryEvent
from gridengine.core.model import DataModel
from gridengine.core.config import InventoryConfig, setup_logging
from gridengine.core.errors import (
    InventoryError,
    InvalidQuantityError,
    ItemNotFoundError,
    SlotNotRegisteredError,
    PlacementConsistencyError,
    SaveDataError,
)

__all__ = [
    # Events
    "EventBus",
    "Event",
    "InventoryEvent",
    # Records
    "DataModel",
    # Config
    "InventoryConfig",
    "setup_logging",
    # Errors
    "InventoryError",
    "InvalidQuantityError",
    "ItemNotFoundError",
    "SlotNotRegisteredError",
    "PlacementConsistencyError",
    "SaveDataError",
]
