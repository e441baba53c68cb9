import logging

from gridengine.core.events import InventoryEvent
from gridinventory.components.inventory import Slot
from gridinventory.systems.registry import SlotRegistry


def test_register_and_iterate(registry):
    a, b = Slot("A", (0, 0)), Slot("B", (1, 0))
    assert registry.register(a)
    assert registry.register(b)

    assert len(registry) == 2
    assert list(registry) == [a, b]
    assert a in registry


def test_duplicate_registration_is_a_warning(registry, caplog):
    slot = Slot("A", (0, 0))
    registry.register(slot)

    with caplog.at_level(logging.WARNING):
        assert not registry.register(slot)

    assert len(registry) == 1
    assert "A tried to register multiple times!" in caplog.text


def test_registration_identity_not_equality(registry):
    # Two slots with the same name and position are still distinct slots
    registry.register(Slot("A", (0, 0)))
    registry.register(Slot("A", (0, 0)))
    assert len(registry) == 2


def test_registration_event(registry, event_bus):
    seen = []
    event_bus.subscribe(InventoryEvent.SLOT_REGISTERED, seen.append, weak=False)

    slot = Slot("A", (0, 0))
    registry.register(slot)
    registry.register(slot)

    assert len(seen) == 1
    assert seen[0]["slot"] is slot


def test_nearest_slots_order(row_of_slots, registry):
    s0, s1, s2, s3 = row_of_slots
    assert registry.nearest_slots((2.2, 0.0)) == [s2, s3, s1, s0]


def test_nearest_slots_ties_keep_registration_order():
    registry = SlotRegistry()
    right = Slot("right", (1.0, 0.0))
    left = Slot("left", (-1.0, 0.0))
    up = Slot("up", (0.0, 1.0))
    for slot in (right, left, up):
        registry.register(slot)

    assert registry.nearest_slots((0.0, 0.0)) == [right, left, up]
    assert registry.closest_slot((0.0, 0.0)) is right


def test_nearest_slots_deterministic_permutation(row_of_slots, registry):
    point = (1.5, 3.0)
    first = registry.nearest_slots(point)
    second = registry.nearest_slots(point)

    assert first == second
    assert sorted(s.name for s in first) == sorted(s.name for s in row_of_slots)
    assert len(first) == len(row_of_slots)


def test_nearest_slots_3d():
    registry = SlotRegistry()
    near = Slot("near", (0.0, 0.0, 5.0))
    far = Slot("far", (0.0, 0.0, -9.0))
    registry.register(far)
    registry.register(near)

    assert registry.nearest_slots((0.0, 0.0, 4.0)) == [near, far]


def test_closest_slot_empty_registry():
    assert SlotRegistry().closest_slot((0, 0)) is None


def test_occupancy_queries(row_of_slots, registry, put, wood):
    s0, s1, s2, s3 = row_of_slots
    tile = put(s2, wood, 3)

    assert registry.slot_with_tile(tile) is s2
    assert registry.occupied_slots() == [s2]
    assert registry.empty_slots() == [s0, s1, s3]
