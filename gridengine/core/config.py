"""
Inventory configuration and logging setup.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any


class InventoryConfig:
    """Configuration for the inventory core."""

    def __init__(
        self,
        save_path: str | Path = "saves",
        save_file_name: str = "inventory_data.json",
        snap_to_best_slot: bool = False,
        validate_checksum: bool = True,
    ):
        self.save_path = Path(save_path)
        self.save_file_name = save_file_name
        # Route drops through the slot selector instead of the closest slot
        self.snap_to_best_slot = snap_to_best_slot
        self.validate_checksum = validate_checksum

    @property
    def save_file(self) -> Path:
        """Full path of the inventory save file."""
        return self.save_path / self.save_file_name

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InventoryConfig:
        """Build a config from a plain dict, ignoring unknown keys."""
        known = {
            'save_path', 'save_file_name', 'snap_to_best_slot',
            'validate_checksum',
        }
        return cls(**{k: v for k, v in data.items() if k in known})


def setup_logging(level: str | int = "INFO") -> None:
    """Configure root logging for tools and demos."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
