"""
Stack operations - merge and split arithmetic.
"""

from __future__ import annotations

from typing import Optional

from gridinventory.components.inventory import ItemStack


class StackOperations:
    """
    Pure merge/split arithmetic over stacks.

    Holds no state; one instance can be shared by every system.
    """

    def attempt_merge(self, target: ItemStack, incoming: ItemStack) -> bool:
        """
        Merge ``incoming`` into ``target``.

        The target fills up to the item's max stack size and the
        incoming stack keeps whatever did not fit.

        Returns:
            False if the items differ (nothing is changed), True otherwise
        """
        if target.item_id != incoming.item_id:
            return False

        total = target.quantity + incoming.quantity
        max_stack = target.item.max_stack

        if total <= max_stack:
            target.quantity = total
            incoming.quantity = 0
        else:
            target.quantity = max_stack
            incoming.quantity = total - max_stack

        return True

    def attempt_split(self, original: ItemStack) -> Optional[ItemStack]:
        """
        Split a stack in two.

        The original keeps the larger half: 5 splits into 3 + 2.

        Returns:
            The new stack, or None if the original holds one item or fewer
        """
        if original.quantity <= 1:
            return None

        half = original.quantity // 2
        original.quantity -= half
        return ItemStack(original.item, half)
