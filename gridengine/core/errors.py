"""
Inventory error taxonomy.

Each error also derives from the builtin the rest of the code would
otherwise raise, so callers catching ``KeyError`` or ``RuntimeError``
keep working.

Expected empty results (no eligible slot, refused split, refused merge)
are NOT errors; they come back as ``None``/``False``/``FAILED``.
"""


class InventoryError(Exception):
    """Base class for inventory errors."""


class InvalidQuantityError(InventoryError, ValueError):
    """A stack was given a negative quantity."""

    def __init__(self, quantity: int):
        super().__init__(f"Stack quantity must be >= 0, got {quantity}")
        self.quantity = quantity


class ItemNotFoundError(InventoryError, KeyError):
    """An item identifier is missing from the catalog."""

    def __init__(self, item_id: str):
        super().__init__(f"Item ID not found in catalog: {item_id}")
        self.item_id = item_id

    def __str__(self) -> str:
        return self.args[0]


class SlotNotRegisteredError(InventoryError, KeyError):
    """A slot was used before it was registered."""

    def __init__(self, slot_name: str):
        super().__init__(f"Slot {slot_name} is not registered")
        self.slot_name = slot_name

    def __str__(self) -> str:
        return self.args[0]


class PlacementConsistencyError(InventoryError, RuntimeError):
    """A tile could not go back to the slot it was dragged out of."""


class SaveDataError(InventoryError, ValueError):
    """A save file is unreadable, malformed or fails its checksum."""
