"""
Item system - item definitions and catalog.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Optional

import jsonschema

from gridengine.core.errors import ItemNotFoundError

# Shape of one entry in an items file
ITEM_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["id"],
    "properties": {
        "id": {"type": "string", "minLength": 1},
        "name": {"type": "string"},
        "description": {"type": "string"},
        "max_stack": {"type": "integer", "minimum": 1},
        "icon": {"type": "string"},
    },
}


@dataclass(frozen=True)
class ItemDefinition:
    """
    Static definition of an item type.

    Only ``id`` and ``max_stack`` matter to stacking and placement;
    the rest is display metadata carried for the presentation layer.
    """
    id: str
    name: str = ""
    description: str = ""

    # Stacking
    max_stack: int = 1

    # Display
    icon_id: str = ""

    def __post_init__(self):
        if self.max_stack < 1:
            raise ValueError(
                f"Item '{self.id}' max_stack must be positive, got {self.max_stack}"
            )

    @property
    def display_name(self) -> str:
        return self.name or self.id


class ItemCatalog:
    """
    Lookup of item definitions by identifier.
    """

    def __init__(self, items: Optional[list[ItemDefinition]] = None):
        self._items: dict[str, ItemDefinition] = {}
        self.logger = logging.getLogger(__name__)

        for item in items or []:
            self.register_item(item)

    def load_items(self, path: Path | str) -> int:
        """
        Load item definitions from a JSON file.

        The file holds either a list of items or ``{"items": [...]}``.
        Entries failing validation are logged and skipped.

        Returns:
            Number of items registered
        """
        path = Path(path)
        if not path.exists():
            self.logger.warning(f"Items file not found: {path}")
            return 0

        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        entries = data.get('items', []) if isinstance(data, dict) else data

        loaded = 0
        for entry in entries:
            try:
                jsonschema.validate(instance=entry, schema=ITEM_SCHEMA)
            except jsonschema.ValidationError as e:
                self.logger.error(f"Validation error in {path}: {e.message}")
                continue

            if self.register_item(self._parse_item(entry)):
                loaded += 1

        self.logger.info(f"Loaded {loaded} items from {path}")
        return loaded

    def _parse_item(self, data: dict) -> ItemDefinition:
        """Parse an item from JSON data."""
        return ItemDefinition(
            id=data['id'],
            name=data.get('name', ''),
            description=data.get('description', ''),
            max_stack=data.get('max_stack', 1),
            icon_id=data.get('icon', ''),
        )

    def register_item(self, item: ItemDefinition) -> bool:
        """
        Register an item definition.

        Returns:
            False if the identifier was already taken (first one wins)
        """
        if item.id in self._items:
            self.logger.warning(f"Duplicate Item ID found: {item.id}")
            return False

        self._items[item.id] = item
        return True

    def get_item(self, item_id: str) -> Optional[ItemDefinition]:
        """Get an item definition, or None."""
        return self._items.get(item_id)

    def lookup_item(self, item_id: str) -> ItemDefinition:
        """
        Get an item definition that must exist.

        Raises:
            ItemNotFoundError: The identifier is not in the catalog
        """
        item = self._items.get(item_id)
        if item is None:
            self.logger.error(f"Item ID not found in catalog: {item_id}")
            raise ItemNotFoundError(item_id)
        return item

    def __contains__(self, item_id: str) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[ItemDefinition]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)
