"""
Base class for plain data records.

Records are data containers with no behaviour. Systems own the logic;
records exist so state can cross a boundary (disk, presentation layer)
in a validated, serializable form.

Usage:
    class ItemStackData(DataModel):
        item_id: str
        quantity: int = Field(ge=0)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DataModel(BaseModel):
    """Base class for all serializable records."""

    model_config = ConfigDict(
        validate_assignment=True,
        # Unknown keys in a save file are a data error
        extra='forbid',
    )
