"""
Inventory components - stacks, tiles and slots.
"""

from gridinventory.components.inventory import (
    ItemStack,
    Position,
    Slot,
    Tile,
    squared_distance,
)

__all__ = [
    "ItemStack",
    "Position",
    "Slot",
    "Tile",
    "squared_distance",
]
