"""
Inventory systems - logic-only processors.

Components hold data; every decision about where an item lands,
how stacks merge and how they split lives here.
"""

from gridinventory.systems.registry import SlotRegistry
from gridinventory.systems.selector import SlotSelector
from gridinventory.systems.stacking import StackOperations
from gridinventory.systems.placement import (
    PlacementEngine,
    PlacementReport,
    PlacementResult,
)
from gridinventory.systems.drag import DragController

__all__ = [
    "SlotRegistry",
    "SlotSelector",
    "StackOperations",
    "PlacementEngine",
    "PlacementReport",
    "PlacementResult",
    "DragController",
]
