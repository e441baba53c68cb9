"""
Slot selector - best eligible slot for a drop.
"""

from __future__ import annotations

from typing import Optional

from gridinventory.components.inventory import ItemStack, Position, Slot
from gridinventory.systems.registry import SlotRegistry


class SlotSelector:
    """
    Picks where a dropped stack should go.

    Walks every slot nearest-first and returns the first one that
    can take the stack, so a full or incompatible slot under the
    pointer falls through to the next closest candidate.
    """

    def __init__(self, registry: SlotRegistry):
        self.registry = registry

    def is_eligible(self, slot: Slot, stack: ItemStack) -> bool:
        """
        Check whether ``slot`` can take ``stack``.

        An occupied slot qualifies only for the same item with room to
        spare: the combined quantity must stay strictly below the max
        stack size. A merge that would exactly fill the slot is not
        offered here, although StackOperations.attempt_merge accepts it.
        """
        occupant = slot.stack
        if occupant is None:
            return True

        return (
            occupant.item_id == stack.item_id and
            occupant.quantity + stack.quantity < occupant.item.max_stack
        )

    def select_best_slot(
        self,
        stack: ItemStack,
        drop_point: Position,
    ) -> Optional[Slot]:
        """
        Find the nearest slot that can take ``stack``.

        Returns:
            The slot, or None when no slot qualifies
        """
        for slot in self.registry.nearest_slots(drop_point):
            if self.is_eligible(slot, stack):
                return slot
        return None
