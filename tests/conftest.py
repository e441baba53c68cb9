import os
import sys
import pytest

# Ensure project packages can be imported
sys.path.append(os.getcwd())


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from gridengine.core.events import EventBus
    return EventBus()


@pytest.fixture
def wood():
    from gridinventory.inventory.items import ItemDefinition
    return ItemDefinition(id="Material_Wood", name="Wood", max_stack=10)


@pytest.fixture
def metal():
    from gridinventory.inventory.items import ItemDefinition
    return ItemDefinition(id="Material_Metal", name="Metal", max_stack=20)


@pytest.fixture
def pistol():
    from gridinventory.inventory.items import ItemDefinition
    return ItemDefinition(id="Gun_Pistol", name="Pistol", max_stack=1)


@pytest.fixture
def catalog(wood, metal, pistol):
    """Catalog with the demo items."""
    from gridinventory.inventory.items import ItemCatalog, ItemDefinition
    medkit = ItemDefinition(id="Consumable_Medkit", name="Medkit", max_stack=5)
    return ItemCatalog([wood, metal, pistol, medkit])


@pytest.fixture
def registry(event_bus):
    """Empty slot registry."""
    from gridinventory.systems.registry import SlotRegistry
    return SlotRegistry(event_bus)


@pytest.fixture
def engine(registry, event_bus):
    """Placement engine over the fixture registry."""
    from gridinventory.systems.placement import PlacementEngine
    return PlacementEngine(registry, event_bus=event_bus)


@pytest.fixture
def row_of_slots(registry):
    """Four registered slots at x = 0, 1, 2, 3."""
    from gridinventory.components.inventory import Slot
    slots = [Slot(f"S{i}", (float(i), 0.0)) for i in range(4)]
    for slot in slots:
        registry.register(slot)
    return slots


@pytest.fixture
def put():
    """Place a new tile holding item x quantity directly into a slot."""
    from gridinventory.components.inventory import ItemStack, Tile

    def _put(slot, item, quantity):
        tile = Tile(ItemStack(item, quantity))
        slot.tile = tile
        return tile

    return _put
