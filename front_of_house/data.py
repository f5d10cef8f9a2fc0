"""Default catalog data and label lookups."""

from __future__ import annotations

from front_of_house.constant import (
    CATEGORY_ICON_GLYPHS,
    DEFAULT_CATEGORIES as _DEFAULT_CATEGORIES_RAW,
    DEFAULT_MENU_ITEMS as _DEFAULT_MENU_ITEMS_RAW,
    ORDER_STATUS_LABELS,
    PAYMENT_METHOD_LABELS,
    TABLE_STATUS_LABELS,
)
from front_of_house.models import Category, MenuItem


def default_categories() -> list[Category]:
    """Categories seeded on first run."""
    return [Category.from_dict(raw) for raw in _DEFAULT_CATEGORIES_RAW]


def default_menu_items() -> list[MenuItem]:
    """Menu items seeded on first run."""
    return [MenuItem.from_dict(raw) for raw in _DEFAULT_MENU_ITEMS_RAW]


def icon_glyph(icon: str) -> str:
    """Glyph for a category icon tag; unknown tags fall back to the utensils glyph."""
    return CATEGORY_ICON_GLYPHS.get(icon, CATEGORY_ICON_GLYPHS["Utensils"])


def table_status_label(status: str) -> str:
    return TABLE_STATUS_LABELS.get(status, status)


def order_status_label(status: str) -> str:
    return ORDER_STATUS_LABELS.get(status, status)


def payment_method_label(method: str | None) -> str:
    if method is None:
        return "-"
    return PAYMENT_METHOD_LABELS.get(method, method)


def next_category_icon(icon: str) -> str:
    """The icon tag after icon in the glyph table, wrapping around; unknown tags start over."""
    tags = list(CATEGORY_ICON_GLYPHS)
    if icon not in tags:
        return tags[0]
    return tags[(tags.index(icon) + 1) % len(tags)]
