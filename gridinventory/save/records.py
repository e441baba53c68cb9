"""
Save records - the serializable inventory snapshot.
"""

from __future__ import annotations

from pydantic import Field

from gridengine.core.model import DataModel


class ItemStackData(DataModel):
    """One occupied slot: which item and how many."""
    item_id: str = Field(min_length=1)
    quantity: int = Field(ge=0)


class InventorySaveData(DataModel):
    """Saved inventory: one record per occupied slot, in registry order."""
    version: str = "1.0"
    item_stacks: list[ItemStackData] = Field(default_factory=list)
