from __future__ import annotations

import pytest

from front_of_house.tables import TableRegistry


def test_tables_are_numbered_in_creation_order(store):
    registry = TableRegistry(store)
    added = [registry.add_table() for _ in range(3)]

    assert [t.number for t in added] == [1, 2, 3]
    assert all(t.status == "available" and t.current_order_id is None for t in added)
    assert [t.id for t in registry.tables] == [t.id for t in added]


def test_remove_table_takes_the_last_one(store):
    registry = TableRegistry(store)
    first = registry.add_table()
    second = registry.add_table()

    assert registry.remove_table().id == second.id
    assert [t.id for t in registry.tables] == [first.id]


def test_remove_table_on_empty_registry_is_a_no_op(store):
    registry = TableRegistry(store)
    assert registry.remove_table() is None
    assert registry.tables == []

    registry.add_table()
    registry.remove_table()
    assert registry.remove_table() is None
    assert registry.tables == []


def test_numbering_follows_current_count_after_removal(store):
    registry = TableRegistry(store)
    registry.add_table()
    registry.add_table()
    registry.remove_table()

    assert registry.add_table().number == 2


def test_update_table_status_sets_and_clears_order_link(store):
    registry = TableRegistry(store)
    table = registry.add_table()

    occupied = registry.update_table_status(table.id, "occupied", "order-1")
    assert occupied.status == "occupied"
    assert occupied.current_order_id == "order-1"

    freed = registry.update_table_status(table.id, "available")
    assert freed.status == "available"
    assert freed.current_order_id is None


def test_update_unknown_table_is_a_no_op(store):
    registry = TableRegistry(store)
    table = registry.add_table()

    assert registry.update_table_status("nope", "occupied", "order-1") is None
    assert registry.get(table.id).status == "available"


def test_update_with_unknown_status_raises(store):
    registry = TableRegistry(store)
    table = registry.add_table()
    with pytest.raises(ValueError):
        registry.update_table_status(table.id, "dirty")


def test_toggle_reserved(store):
    registry = TableRegistry(store)
    table = registry.add_table()

    assert registry.toggle_reserved(table.id).status == "reserved"
    assert registry.toggle_reserved(table.id).status == "available"

    registry.update_table_status(table.id, "occupied", "order-1")
    assert registry.toggle_reserved(table.id) is None
    assert registry.get(table.id).status == "occupied"


def test_tables_survive_reload(store):
    registry = TableRegistry(store)
    table = registry.add_table()
    registry.add_table()
    registry.update_table_status(table.id, "occupied", "order-9")

    reloaded = TableRegistry(store).tables
    assert [t.number for t in reloaded] == [1, 2]
    assert reloaded[0].current_order_id == "order-9"
    assert reloaded[0].status == "occupied"
