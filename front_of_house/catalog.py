"""Category and menu item lists."""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Any
from uuid import uuid4

from front_of_house.data import default_categories, default_menu_items
from front_of_house.models import Category, MenuItem, to_decimal
from front_of_house.persistence import CATEGORIES_KEY, MENU_ITEMS_KEY, SnapshotRepository, SnapshotStore

logger = logging.getLogger(__name__)


def _checked_price(value: Any) -> Decimal:
    price = to_decimal(value)
    if price < 0:
        raise ValueError("price must not be negative")
    return price


def validate_category_name(name: str) -> str:
    """Normalize a typed category name; names are stored trimmed and lowercase."""
    cleaned = name.strip().lower()
    if not cleaned:
        raise ValueError("Category name is required.")
    return cleaned


def validate_menu_item_input(name: str, price_text: str) -> tuple[str, Decimal]:
    """
    Check typed menu item fields.

    The name must not be blank and the price must be above zero. A comma is
    accepted as the decimal separator.
    """
    cleaned = name.strip()
    if not cleaned:
        raise ValueError("Item name is required.")
    try:
        price = _checked_price(price_text.strip().replace(",", "."))
    except ValueError as exc:
        raise ValueError("Price must be a number above zero.") from exc
    if price == 0:
        raise ValueError("Price must be a number above zero.")
    return cleaned, price


class CatalogManager:
    """
    Owns categories and menu items.

    Menu items reference categories by name. Renaming a category leaves items
    pointing at the old name; callers that care must update those items too.
    Deleting a category is not guarded here, see ``front_of_house.guards``.
    """

    def __init__(self, store: SnapshotStore) -> None:
        self._category_repo = SnapshotRepository(
            store, CATEGORIES_KEY, Category.from_dict, Category.to_dict, default_categories
        )
        self._item_repo = SnapshotRepository(
            store, MENU_ITEMS_KEY, MenuItem.from_dict, MenuItem.to_dict, default_menu_items
        )
        self._categories: list[Category] = self._category_repo.load_all()
        self._menu_items: list[MenuItem] = self._item_repo.load_all()

    @property
    def categories(self) -> list[Category]:
        return list(self._categories)

    @property
    def menu_items(self) -> list[MenuItem]:
        return list(self._menu_items)

    def get_category(self, category_id: str) -> Category | None:
        return next((c for c in self._categories if c.id == category_id), None)

    def get_menu_item(self, item_id: str) -> MenuItem | None:
        return next((item for item in self._menu_items if item.id == item_id), None)

    def items_in_category(self, category_name: str) -> list[MenuItem]:
        return [item for item in self._menu_items if item.category == category_name]

    def _set_categories(self, updated: list[Category]) -> None:
        self._categories = updated
        self._category_repo.save_all(updated)

    def _set_menu_items(self, updated: list[MenuItem]) -> None:
        self._menu_items = updated
        self._item_repo.save_all(updated)

    def add_category(self, name: str, icon: str = "Utensils") -> Category:
        category = Category(id=uuid4().hex, name=name.strip().lower(), icon=icon)
        self._set_categories([*self._categories, category])
        logger.info("category added id=%s name=%r", category.id, category.name)
        return category

    def update_category(self, category_id: str, **changes: Any) -> Category | None:
        """Apply field changes to a category. Does not touch menu items."""
        current = self.get_category(category_id)
        if current is None:
            logger.debug("update_category: unknown id %s", category_id)
            return None
        updated = replace(current, **changes)
        self._set_categories([updated if c.id == category_id else c for c in self._categories])
        return updated

    def delete_category(self, category_id: str) -> bool:
        if self.get_category(category_id) is None:
            logger.debug("delete_category: unknown id %s", category_id)
            return False
        self._set_categories([c for c in self._categories if c.id != category_id])
        logger.info("category deleted id=%s", category_id)
        return True

    def add_menu_item(self, name: str, category: str, price: Any) -> MenuItem:
        item = MenuItem(id=uuid4().hex, name=name.strip(), category=category, price=_checked_price(price))
        self._set_menu_items([*self._menu_items, item])
        logger.info("menu item added id=%s name=%r price=%s", item.id, item.name, item.price)
        return item

    def update_menu_item(self, item_id: str, **changes: Any) -> MenuItem | None:
        current = self.get_menu_item(item_id)
        if current is None:
            logger.debug("update_menu_item: unknown id %s", item_id)
            return None
        if "price" in changes:
            changes["price"] = _checked_price(changes["price"])
        updated = replace(current, **changes)
        self._set_menu_items([updated if item.id == item_id else item for item in self._menu_items])
        return updated

    def delete_menu_item(self, item_id: str) -> bool:
        if self.get_menu_item(item_id) is None:
            logger.debug("delete_menu_item: unknown id %s", item_id)
            return False
        self._set_menu_items([item for item in self._menu_items if item.id != item_id])
        logger.info("menu item deleted id=%s", item_id)
        return True
