"""
Inventory repository - reading and writing the save file.

File access runs in a worker thread so the caller's event loop is
never blocked; everything else in the inventory stays synchronous.
"""

from __future__ import annotations

import asyncio
import base64
import hashlib
import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from gridengine.core.errors import SaveDataError
from gridinventory.save.records import InventorySaveData

logger = logging.getLogger(__name__)


class InventoryRepository:
    """
    JSON file store for inventory snapshots.

    File layout:
        {"version": "1.0", "item_stacks": [{"item_id": ..., "quantity": ...}],
         "checksum": "<base64 sha256>"}
    """

    def __init__(self, save_file: Path | str, validate_checksum: bool = True):
        self.save_file = Path(save_file)
        self.validate_checksum = validate_checksum

    def file_exists(self) -> bool:
        return self.save_file.exists()

    async def load_inventory(self) -> Optional[InventorySaveData]:
        """
        Read the save file.

        Returns:
            The snapshot, or None if there is no save file

        Raises:
            SaveDataError: The file is unreadable, malformed or corrupted
        """
        return await asyncio.to_thread(self._read)

    async def save_inventory(self, data: InventorySaveData) -> None:
        """Write a snapshot, replacing any previous save."""
        await asyncio.to_thread(self._write, data)

    def _read(self) -> Optional[InventorySaveData]:
        if not self.save_file.exists():
            logger.warning(f"Cannot find save file at: {self.save_file}")
            return None

        try:
            with open(self.save_file, 'r', encoding='utf-8') as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SaveDataError(f"Error reading {self.save_file}: {e}") from e

        if not isinstance(payload, dict):
            raise SaveDataError(f"Save file {self.save_file} is not a JSON object")

        checksum = payload.pop('checksum', None)
        if self.validate_checksum and checksum:
            if calculate_checksum(payload) != checksum:
                raise SaveDataError(f"Save file corrupted: checksum mismatch in {self.save_file}")

        try:
            return InventorySaveData.model_validate(payload)
        except ValidationError as e:
            raise SaveDataError(f"Invalid save data in {self.save_file}: {e}") from e

    def _write(self, data: InventorySaveData) -> None:
        payload = data.model_dump()
        payload['checksum'] = calculate_checksum(payload)

        self.save_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.save_file, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2)

        logger.info(f"Successfully saved to: {self.save_file}")


def calculate_checksum(data: dict) -> str:
    """Base64 SHA-256 of the canonical JSON form of ``data``."""
    json_str = json.dumps(data, sort_keys=True, separators=(',', ':'))
    hash_bytes = hashlib.sha256(json_str.encode('utf-8')).digest()
    return base64.b64encode(hash_bytes).decode('ascii')
