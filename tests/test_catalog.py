from __future__ import annotations

from decimal import Decimal

import pytest

from front_of_house.catalog import CatalogManager, validate_category_name, validate_menu_item_input
from front_of_house.catalog_modal import catalog_rows
from front_of_house.data import next_category_icon
from front_of_house.guards import CategoryInUseError, category_conflicts, delete_category_guarded
from front_of_house.persistence import CATEGORIES_KEY, MENU_ITEMS_KEY


def test_defaults_are_seeded_and_persisted(store):
    catalog = CatalogManager(store)

    assert [c.name for c in catalog.categories] == ["espetos", "lanches", "bebidas"]
    assert len(catalog.menu_items) == 6
    assert catalog.get_menu_item("1").price == Decimal("8.50")
    assert len(store.load(CATEGORIES_KEY)) == 3
    assert len(store.load(MENU_ITEMS_KEY)) == 6


def test_existing_snapshot_is_not_replaced_by_defaults(store):
    store.save(CATEGORIES_KEY, [{"id": "x", "name": "sobremesas", "icon": "Tag"}])
    store.save(MENU_ITEMS_KEY, [])

    catalog = CatalogManager(store)
    assert [c.name for c in catalog.categories] == ["sobremesas"]
    assert catalog.menu_items == []


def test_add_category_normalizes_name(store):
    catalog = CatalogManager(store)
    category = catalog.add_category("  Porções ", "Tag")

    assert category.name == "porções"
    assert CatalogManager(store).get_category(category.id) == category


def test_menu_item_crud(store):
    catalog = CatalogManager(store)
    item = catalog.add_menu_item("Suco", "bebidas", "7.5")
    assert item.price == Decimal("7.5")

    updated = catalog.update_menu_item(item.id, price=9, name="Suco de Laranja")
    assert updated.price == Decimal("9")
    assert updated.name == "Suco de Laranja"

    assert catalog.delete_menu_item(item.id) is True
    assert catalog.get_menu_item(item.id) is None
    assert catalog.delete_menu_item(item.id) is False
    assert catalog.update_menu_item(item.id, name="x") is None


def test_negative_price_is_rejected(store):
    catalog = CatalogManager(store)
    with pytest.raises(ValueError):
        catalog.add_menu_item("Brinde", "bebidas", "-1")
    with pytest.raises(ValueError):
        catalog.update_menu_item("1", price=Decimal("-0.01"))


def test_category_rename_does_not_cascade(store):
    catalog = CatalogManager(store)
    catalog.update_category("3", name="drinks")

    assert catalog.get_category("3").name == "drinks"
    assert [item.category for item in catalog.menu_items].count("bebidas") == 2
    assert catalog.items_in_category("drinks") == []


def test_guard_reports_exact_conflict_count(store):
    catalog = CatalogManager(store)
    assert category_conflicts(catalog, "1") == 2

    with pytest.raises(CategoryInUseError) as excinfo:
        delete_category_guarded(catalog, "1")

    assert excinfo.value.item_count == 2
    assert excinfo.value.category_name == "espetos"
    assert "2 item(s)" in str(excinfo.value)
    assert catalog.get_category("1") is not None


def test_guard_allows_deleting_unused_category(store):
    catalog = CatalogManager(store)
    empty = catalog.add_category("sobremesas", "Tag")

    assert category_conflicts(catalog, empty.id) == 0
    assert delete_category_guarded(catalog, empty.id) is True
    assert catalog.get_category(empty.id) is None


def test_guard_on_unknown_category(store):
    catalog = CatalogManager(store)
    assert category_conflicts(catalog, "nope") == 0
    assert delete_category_guarded(catalog, "nope") is False


def test_raw_delete_is_unguarded(store):
    catalog = CatalogManager(store)
    assert catalog.delete_category("1") is True
    assert len(catalog.items_in_category("espetos")) == 2


def test_guard_uses_the_same_count_as_conflict_check(store, monkeypatch):
    catalog = CatalogManager(store)
    monkeypatch.setattr("front_of_house.guards.category_conflicts", lambda catalog, category_id: 7)

    with pytest.raises(CategoryInUseError) as excinfo:
        delete_category_guarded(catalog, "2")
    assert excinfo.value.item_count == 7


def test_typed_menu_item_needs_name_and_positive_price():
    assert validate_menu_item_input("  Pastel ", "6,50") == ("Pastel", Decimal("6.50"))

    with pytest.raises(ValueError, match="name is required"):
        validate_menu_item_input("   ", "6.50")
    for price_text in ("0", "0.00", "-1", "abc", ""):
        with pytest.raises(ValueError, match="above zero"):
            validate_menu_item_input("Pastel", price_text)


def test_typed_category_name_is_normalized():
    assert validate_category_name("  Sobremesas ") == "sobremesas"
    with pytest.raises(ValueError):
        validate_category_name("  ")


def test_icon_cycle_wraps_and_recovers_unknown_tags():
    assert next_category_icon("Utensils") == "Coffee"
    assert next_category_icon("Tag") == "Utensils"
    assert next_category_icon("Pizza") == "Utensils"


def test_catalog_rows_group_items_under_categories(store):
    catalog = CatalogManager(store)
    orphan = catalog.add_menu_item("Pastel", "salgados", "6.00")

    rows = catalog_rows(catalog)

    assert rows[:4] == [("category", "1"), ("item", "1"), ("item", "2"), ("category", "2")]
    assert rows[-1] == ("item", orphan.id)
    assert len(rows) == len(catalog.categories) + len(catalog.menu_items)


def test_renamed_category_leaves_its_items_listed_as_orphans(store):
    catalog = CatalogManager(store)
    catalog.update_category("1", name=validate_category_name("Churrasco"))

    rows = catalog_rows(catalog)

    assert rows[0] == ("category", "1")
    assert rows[1] == ("category", "2")
    assert rows[-2:] == [("item", "1"), ("item", "2")]
