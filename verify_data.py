import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent))

from gridengine.core.config import setup_logging
from gridengine.core.errors import InventoryError
from gridinventory.inventory.items import ItemCatalog
from gridinventory.save.repository import InventoryRepository


async def verify(items_path: Path, save_path: Path | None) -> int:
    logger = logging.getLogger("DataVerification")

    catalog = ItemCatalog()
    logger.info("Loading item catalog...")
    if catalog.load_items(items_path) == 0:
        raise InventoryError(f"No items loaded from {items_path}")

    if save_path is None:
        return len(catalog)

    # Every saved stack must resolve and fit its item's max stack size
    data = await InventoryRepository(save_path).load_inventory()
    if data is None:
        raise InventoryError(f"No save file at {save_path}")

    for record in data.item_stacks:
        item = catalog.lookup_item(record.item_id)
        assert 0 < record.quantity <= item.max_stack, (
            f"{record.item_id} x{record.quantity} outside 1..{item.max_stack}"
        )

    logger.info(f"Save file holds {len(data.item_stacks)} valid stacks")
    return len(catalog)


def main():
    setup_logging("INFO")
    logger = logging.getLogger("DataVerification")

    if len(sys.argv) < 2:
        print("usage: python verify_data.py ITEMS_JSON [SAVE_JSON]")
        sys.exit(2)

    items_path = Path(sys.argv[1])
    save_path = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    try:
        count = asyncio.run(verify(items_path, save_path))
        logger.info(f"VERIFICATION SUCCESSFUL: {count} items loaded and validated.")
    except (InventoryError, AssertionError, OSError, ValueError) as e:
        logger.error(f"VERIFICATION FAILED: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
