"""
Inventory components - stacks, tiles, slots.
"""

from __future__ import annotations

from itertools import count, zip_longest
from typing import TYPE_CHECKING, Callable, Optional

from gridengine.core.errors import InvalidQuantityError

if TYPE_CHECKING:
    from gridinventory.inventory.items import ItemDefinition


# A 2D or 3D position; only used for distance comparisons
Position = tuple[float, ...]

QuantityListener = Callable[[int], None]


def squared_distance(a: Position, b: Position) -> float:
    """Squared Euclidean distance, zero-padding the shorter position."""
    return sum((p - q) ** 2 for p, q in zip_longest(a, b, fillvalue=0.0))


class ItemStack:
    """
    A quantity of one item type.

    Quantity is not clamped to the item's max stack size; the
    stacking operations are responsible for respecting the cap.

    Attributes:
        item: The item definition
        quantity: Number of items in the stack (>= 0)
    """

    def __init__(self, item: ItemDefinition, quantity: int = 1):
        if quantity < 0:
            raise InvalidQuantityError(quantity)
        self.item = item
        self._quantity = quantity
        self._listeners: list[QuantityListener] = []

    @property
    def quantity(self) -> int:
        return self._quantity

    @quantity.setter
    def quantity(self, value: int) -> None:
        self.set_quantity(value)

    def set_quantity(self, value: int) -> None:
        """Set quantity, notifying listeners only when it changes."""
        if value < 0:
            raise InvalidQuantityError(value)
        if value == self._quantity:
            return
        self._quantity = value
        for listener in list(self._listeners):
            listener(value)

    def subscribe(self, listener: QuantityListener) -> None:
        """Call ``listener(new_quantity)`` whenever quantity changes."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: QuantityListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def item_id(self) -> str:
        return self.item.id

    @property
    def max_stack(self) -> int:
        return self.item.max_stack

    @property
    def is_full(self) -> bool:
        """Check if stack is at max."""
        return self._quantity >= self.item.max_stack

    @property
    def is_empty(self) -> bool:
        """Check if stack is empty."""
        return self._quantity <= 0

    def __repr__(self) -> str:
        return f"ItemStack({self.item.id!r}, {self._quantity})"


_tile_ids = count(1)


class Tile:
    """
    Carrier of a stack while it is dragged and dropped.

    A destroyed tile has no stack; any placement call made with it
    is ignored.

    Attributes:
        stack: The carried stack (None once destroyed)
        position: Where the tile currently is
        name: Debug name
    """

    def __init__(
        self,
        stack: Optional[ItemStack],
        position: Position = (0.0, 0.0),
        name: str = "",
    ):
        self.id = next(_tile_ids)
        self.stack = stack
        self.position = tuple(position)
        self.name = name or f"Tile{self.id}"

    @property
    def is_destroyed(self) -> bool:
        return self.stack is None

    def destroy(self) -> None:
        """Drop the carried stack."""
        self.stack = None

    def __repr__(self) -> str:
        return f"Tile({self.name!r}, {self.stack!r})"


class Slot:
    """
    A fixed placement location holding at most one tile.

    Attributes:
        name: Slot name (for logs)
        position: Layout position, used for proximity
        tile: Current occupant, or None
    """

    def __init__(self, name: str, position: Position = (0.0, 0.0)):
        self.name = name
        self.position = tuple(position)
        self._tile: Optional[Tile] = None

    @property
    def tile(self) -> Optional[Tile]:
        return self._tile

    @tile.setter
    def tile(self, tile: Optional[Tile]) -> None:
        self._tile = tile
        # Occupants snap to the slot
        if tile is not None:
            tile.position = self.position

    @property
    def stack(self) -> Optional[ItemStack]:
        """Stack held by the occupant, if any."""
        return self._tile.stack if self._tile is not None else None

    @property
    def is_empty(self) -> bool:
        return self._tile is None

    def distance_sq(self, point: Position) -> float:
        return squared_distance(self.position, point)

    def __repr__(self) -> str:
        return f"Slot({self.name!r}, {self.position}, tile={self._tile!r})"
