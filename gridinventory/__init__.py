"""
Slot-grid inventory.

Provides inventory logic built on top of the grid engine:
- Components (stacks, tiles, slots)
- Inventory (item catalog, inventory manager)
- Systems (registry, selector, stacking, placement, drag)
- Save (snapshot persistence)
"""

__version__ = "0.1.0"
