"""Editable static catalog defaults and display labels."""

from __future__ import annotations

DEFAULT_CATEGORIES: list[dict[str, str]] = [
    {"id": "1", "name": "espetos", "icon": "Utensils"},
    {"id": "2", "name": "lanches", "icon": "Coffee"},
    {"id": "3", "name": "bebidas", "icon": "Wine"},
]

DEFAULT_MENU_ITEMS: list[dict[str, str]] = [
    {"id": "1", "name": "Espeto de Carne", "category": "espetos", "price": "8.50"},
    {"id": "2", "name": "Espeto de Frango", "category": "espetos", "price": "7.00"},
    {"id": "3", "name": "X-Burger", "category": "lanches", "price": "15.00"},
    {"id": "4", "name": "X-Salada", "category": "lanches", "price": "18.00"},
    {"id": "5", "name": "Coca-Cola", "category": "bebidas", "price": "5.00"},
    {"id": "6", "name": "Cerveja", "category": "bebidas", "price": "6.00"},
]

CATEGORY_ICON_GLYPHS: dict[str, str] = {
    "Utensils": "🍴",
    "Coffee": "☕",
    "Wine": "🍷",
    "Tag": "🏷",
}

TABLE_STATUS_LABELS: dict[str, str] = {
    "available": "Free",
    "occupied": "Occupied",
    "reserved": "Reserved",
}

ORDER_STATUS_LABELS: dict[str, str] = {
    "active": "Active",
    "standby": "Standby",
    "completed": "Completed",
}

PAYMENT_METHOD_LABELS: dict[str, str] = {
    "cash": "Cash",
    "card": "Card",
    "pix": "Pix",
}

# Values written by older snapshots.
LEGACY_PAYMENT_METHODS: dict[str, str] = {
    "dinheiro": "cash",
    "cartao": "card",
}

CURRENCY_PREFIX = "R$"
