import json
import logging
from collections import Counter

import pytest

from gridengine.core.errors import ItemNotFoundError
from gridinventory.components.inventory import Slot
from gridinventory.save.manager import SaveEvent, SaveManager
from gridinventory.save.records import InventorySaveData, ItemStackData
from gridinventory.save.repository import InventoryRepository
from gridinventory.systems.placement import PlacementEngine
from gridinventory.systems.registry import SlotRegistry


def make_inventory(catalog, save_file, slot_count, event_bus=None):
    registry = SlotRegistry()
    for i in range(slot_count):
        registry.register(Slot(f"slot_{i}", (float(i), 0.0)))
    engine = PlacementEngine(registry)
    repository = InventoryRepository(save_file)
    return registry, SaveManager(registry, engine, catalog, repository, event_bus)


def contents(registry):
    return Counter(
        (slot.stack.item_id, slot.stack.quantity)
        for slot in registry.occupied_slots()
    )


def test_snapshot_registry_order(catalog, tmp_path, put, wood, metal):
    registry, save_mgr = make_inventory(catalog, tmp_path / "inv.json", 4)
    slots = registry.slots
    put(slots[3], wood, 2)
    put(slots[1], metal, 7)

    data = save_mgr.snapshot()

    assert [(r.item_id, r.quantity) for r in data.item_stacks] == [
        ("Material_Metal", 7),
        ("Material_Wood", 2),
    ]


def test_reconstruct_fills_from_last_slot(catalog, tmp_path):
    registry, save_mgr = make_inventory(catalog, tmp_path / "inv.json", 3)
    data = InventorySaveData(item_stacks=[ItemStackData(item_id="Gun_Pistol", quantity=1)])

    assert save_mgr.reconstruct(data) == 1
    assert registry.slots[2].stack.item_id == "Gun_Pistol"


def test_reconstruct_unknown_item_leaves_inventory_untouched(catalog, tmp_path, put, wood):
    registry, save_mgr = make_inventory(catalog, tmp_path / "inv.json", 2)
    put(registry.slots[0], wood, 4)
    data = InventorySaveData(item_stacks=[
        ItemStackData(item_id="Material_Wood", quantity=1),
        ItemStackData(item_id="Material_Stone", quantity=1),
    ])

    with pytest.raises(ItemNotFoundError):
        save_mgr.reconstruct(data)

    assert contents(registry) == Counter({("Material_Wood", 4): 1})


def test_reconstruct_more_stacks_than_slots(catalog, tmp_path, caplog):
    registry, save_mgr = make_inventory(catalog, tmp_path / "inv.json", 1)
    data = InventorySaveData(item_stacks=[
        ItemStackData(item_id="Material_Wood", quantity=1),
        ItemStackData(item_id="Material_Metal", quantity=1),
    ])

    with caplog.at_level(logging.WARNING):
        assert save_mgr.reconstruct(data) == 1
    assert "Reconstructed 1 of 2" in caplog.text


@pytest.mark.asyncio
async def test_save_and_reload_round_trip(catalog, tmp_path, put, wood, metal, pistol, event_bus):
    save_file = tmp_path / "saves" / "inventory_data.json"
    registry, save_mgr = make_inventory(catalog, save_file, 5)
    slots = registry.slots
    put(slots[0], wood, 3)
    put(slots[2], metal, 20)
    put(slots[4], pistol, 1)
    before = contents(registry)

    assert await save_mgr.save_inventory()
    assert save_file.exists()

    events = []
    event_bus.subscribe(SaveEvent.LOAD_COMPLETED, events.append, weak=False)
    fresh_registry, fresh_mgr = make_inventory(catalog, save_file, 6, event_bus)

    data = await fresh_mgr.load_inventory()

    assert data is not None
    assert contents(fresh_registry) == before
    assert len(events) == 1


@pytest.mark.asyncio
async def test_load_replaces_existing_contents(catalog, tmp_path, put, wood, metal):
    save_file = tmp_path / "inventory_data.json"
    registry, save_mgr = make_inventory(catalog, save_file, 3)
    put(registry.slots[0], wood, 5)
    await save_mgr.save_inventory()

    registry.slots[0].tile = None
    put(registry.slots[1], metal, 2)
    await save_mgr.load_inventory()

    assert contents(registry) == Counter({("Material_Wood", 5): 1})


@pytest.mark.asyncio
async def test_load_missing_file(catalog, tmp_path, event_bus, caplog):
    failures = []
    event_bus.subscribe(SaveEvent.LOAD_FAILED, failures.append, weak=False)
    registry, save_mgr = make_inventory(catalog, tmp_path / "nothing.json", 2, event_bus)

    assert not save_mgr.check_save_exists()
    with caplog.at_level(logging.WARNING):
        assert await save_mgr.load_inventory() is None

    assert len(failures) == 1
    assert "Cannot find save file" in caplog.text


@pytest.mark.asyncio
async def test_tampered_file_fails_checksum(catalog, tmp_path, put, wood, event_bus):
    save_file = tmp_path / "inventory_data.json"
    registry, save_mgr = make_inventory(catalog, save_file, 2, event_bus)
    put(registry.slots[0], wood, 2)
    await save_mgr.save_inventory()

    with open(save_file) as f:
        payload = json.load(f)
    payload["item_stacks"][0]["quantity"] = 9
    with open(save_file, "w") as f:
        json.dump(payload, f)

    failures = []
    event_bus.subscribe(SaveEvent.LOAD_FAILED, failures.append, weak=False)

    assert await save_mgr.load_inventory() is None
    assert "checksum" in failures[0]["error"]
    assert registry.slots[0].stack.quantity == 2


@pytest.mark.asyncio
async def test_corrupt_json(catalog, tmp_path):
    save_file = tmp_path / "inventory_data.json"
    save_file.write_text("{not json")
    registry, save_mgr = make_inventory(catalog, save_file, 2)

    assert await save_mgr.load_inventory() is None


@pytest.mark.asyncio
async def test_unknown_item_in_save_is_reported(catalog, tmp_path):
    save_file = tmp_path / "inventory_data.json"
    save_file.write_text(json.dumps({
        "version": "1.0",
        "item_stacks": [{"item_id": "Material_Stone", "quantity": 2}],
    }))
    registry, save_mgr = make_inventory(catalog, save_file, 2)

    with pytest.raises(ItemNotFoundError):
        await save_mgr.load_inventory()


def test_records_validate():
    with pytest.raises(ValueError):
        ItemStackData(item_id="Material_Wood", quantity=-1)
    with pytest.raises(ValueError):
        InventorySaveData.model_validate({"item_stacks": [], "extra": 1})


def test_reconstruct_skipped_empty_records_are_not_shortfalls(catalog, tmp_path, caplog):
    registry, save_mgr = make_inventory(catalog, tmp_path / "inv.json", 2)
    data = InventorySaveData(item_stacks=[
        ItemStackData(item_id="Material_Wood", quantity=0),
        ItemStackData(item_id="Material_Metal", quantity=3),
    ])

    with caplog.at_level(logging.WARNING):
        assert save_mgr.reconstruct(data) == 1

    assert "Skipping empty stack of Material_Wood" in caplog.text
    assert "Reconstructed" not in caplog.text


def test_reconstruct_calls_reset_hook_before_clearing(catalog, tmp_path, put, wood):
    registry, save_mgr = make_inventory(catalog, tmp_path / "inv.json", 2)
    put(registry.slots[0], wood, 4)
    seen = []
    save_mgr.on_reset = lambda: seen.append(contents(registry))

    save_mgr.reconstruct(InventorySaveData(item_stacks=[
        ItemStackData(item_id="Material_Metal", quantity=2),
    ]))

    assert seen == [Counter({("Material_Wood", 4): 1})]
    assert contents(registry) == Counter({("Material_Metal", 2): 1})
