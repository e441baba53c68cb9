"""
Grid Engine

Shared plumbing for the slot-grid inventory: typed event bus,
serializable record base, configuration and error types.
"""

__version__ = "0.1.0"

from gridengine.core import (
    EventBus,
    Event,
    InventoryEvent,
    DataModel,
    InventoryConfig,
    setup_logging,
)

__all__ = [
    "EventBus",
    "Event",
    "InventoryEvent",
    "DataModel",
    "InventoryConfig",
    "setup_logging",
]
