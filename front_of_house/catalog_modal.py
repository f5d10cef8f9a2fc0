"""Catalog editor modal: categories and menu items."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from front_of_house.catalog import CatalogManager, validate_category_name, validate_menu_item_input
from front_of_house.data import icon_glyph, next_category_icon
from front_of_house.guards import CategoryInUseError, delete_category_guarded
from front_of_house.rendering import format_money

CatalogRow = tuple[str, str]

_MAX_ENTRY_LENGTH = 40

_BROWSE_HELP = (
    "J/K move, N new category, A add item, E edit, I icon, D delete, Esc/q close"
)
_ENTRY_HELP = "Type, Enter confirm, Backspace delete, Esc cancel"

_PROMPTS = {
    "new_category": "New category name",
    "rename_category": "Rename category (items keep the old name)",
    "new_item_name": "New item name",
    "new_item_price": "Price",
    "edit_item_name": "Item name",
    "edit_item_price": "Price",
}


def catalog_rows(catalog: CatalogManager) -> list[CatalogRow]:
    """
    Selectable rows in display order: each category followed by its items.

    Items whose category name matches no category come last, so they can
    still be edited or deleted.
    """
    rows: list[CatalogRow] = []
    seen_names: set[str] = set()
    for category in catalog.categories:
        rows.append(("category", category.id))
        if category.name in seen_names:
            continue
        seen_names.add(category.name)
        rows.extend(("item", item.id) for item in catalog.items_in_category(category.name))
    rows.extend(("item", item.id) for item in catalog.menu_items if item.category not in seen_names)
    return rows


class CatalogModal(ModalScreen[None]):
    """Browse and edit the catalog; typed entry happens in place of the help line."""

    CSS = """
    CatalogModal {
        align: center middle;
        background: $background 60%;
    }

    #catalog-dialog {
        width: 72;
        height: auto;
        max-height: 90%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #catalog-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #catalog-body {
        color: white;
    }

    #catalog-entry {
        margin-top: 1;
        color: white;
    }

    #catalog-error {
        margin-top: 1;
        color: #ffb3b3;
    }

    #catalog-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)

    def __init__(self, catalog: CatalogManager, on_change: Callable[[], None]) -> None:
        super().__init__()
        self.catalog = catalog
        self.on_change = on_change
        self.error = ""
        self.mode: str | None = None
        self.value = ""
        self.draft_name = ""
        self.target_id = ""
        self.target_category = ""

    def compose(self) -> ComposeResult:
        with Container(id="catalog-dialog"):
            yield Static("Catalog", id="catalog-title")
            yield Static(id="catalog-body")
            yield Static(id="catalog-entry")
            yield Static(id="catalog-error")
            yield Static(_BROWSE_HELP, id="catalog-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if self.mode is not None:
            self._entry_key(event)
            event.stop()
            return

        handlers: dict[str, Callable[[], None]] = {
            "escape": self._close,
            "q": self._close,
            "ctrl+c": self._close,
            "j": lambda: self._move_cursor(1),
            "down": lambda: self._move_cursor(1),
            "k": lambda: self._move_cursor(-1),
            "up": lambda: self._move_cursor(-1),
            "n": self._start_new_category,
            "a": self._start_new_item,
            "e": self._start_edit,
            "i": self._cycle_icon,
            "d": self._delete_current,
        }
        handler = handlers.get(event.key)
        if handler is None:
            return
        handler()
        event.stop()

    def _close(self) -> None:
        self.dismiss()
        self.on_change()

    def _current_row(self) -> CatalogRow | None:
        rows = catalog_rows(self.catalog)
        if not rows:
            return None
        return rows[min(self.cursor_index, len(rows) - 1)]

    def _move_cursor(self, delta: int) -> None:
        rows = catalog_rows(self.catalog)
        if not rows:
            return
        self.cursor_index = (self.cursor_index + delta) % len(rows)
        self.error = ""
        self._refresh_content()

    def _begin(self, mode: str, value: str = "") -> None:
        self.mode = mode
        self.value = value
        self.error = ""
        self._refresh_content()

    def _start_new_category(self) -> None:
        self._begin("new_category")

    def _start_new_item(self) -> None:
        row = self._current_row()
        category_name = ""
        if row is not None and row[0] == "category":
            category = self.catalog.get_category(row[1])
            category_name = category.name if category else ""
        elif row is not None:
            item = self.catalog.get_menu_item(row[1])
            category_name = item.category if item else ""
        if not category_name:
            self.error = "Create a category first."
            self._refresh_content()
            return
        self.target_category = category_name
        self._begin("new_item_name")

    def _start_edit(self) -> None:
        row = self._current_row()
        if row is None:
            return
        kind, row_id = row
        self.target_id = row_id
        if kind == "category":
            category = self.catalog.get_category(row_id)
            if category is not None:
                self._begin("rename_category", category.name)
            return
        item = self.catalog.get_menu_item(row_id)
        if item is not None:
            self._begin("edit_item_name", item.name)

    def _cycle_icon(self) -> None:
        row = self._current_row()
        if row is None or row[0] != "category":
            return
        category = self.catalog.get_category(row[1])
        if category is None:
            return
        self.catalog.update_category(category.id, icon=next_category_icon(category.icon))
        self.error = ""
        self._refresh_content()

    def _delete_current(self) -> None:
        row = self._current_row()
        if row is None:
            return
        kind, row_id = row
        if kind == "item":
            self.catalog.delete_menu_item(row_id)
            self.error = ""
            self._refresh_content()
            return
        try:
            delete_category_guarded(self.catalog, row_id)
        except CategoryInUseError as exc:
            self.error = str(exc)
        else:
            self.error = ""
        self._refresh_content()

    def _entry_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.mode = None
            self.value = ""
            self.error = ""
            self._refresh_content()
            return

        if event.key == "enter":
            self._confirm_entry()
            return

        if event.key == "backspace":
            if self.value:
                self.value = self.value[:-1]
                self.error = ""
                self._refresh_content()
            return

        if event.is_printable and event.character:
            if len(self.value) < _MAX_ENTRY_LENGTH:
                self.value += event.character
            self.error = ""
            self._refresh_content()

    def _confirm_entry(self) -> None:
        mode = self.mode
        try:
            if mode == "new_category":
                self.catalog.add_category(validate_category_name(self.value))
            elif mode == "rename_category":
                self.catalog.update_category(self.target_id, name=validate_category_name(self.value))
            elif mode in {"new_item_name", "edit_item_name"}:
                if not self.value.strip():
                    raise ValueError("Item name is required.")
                self.draft_name = self.value
                current = self.catalog.get_menu_item(self.target_id) if mode == "edit_item_name" else None
                next_mode = "edit_item_price" if mode == "edit_item_name" else "new_item_price"
                self._begin(next_mode, str(current.price) if current is not None else "")
                return
            elif mode == "new_item_price":
                name, price = validate_menu_item_input(self.draft_name, self.value)
                self.catalog.add_menu_item(name, self.target_category, price)
            elif mode == "edit_item_price":
                name, price = validate_menu_item_input(self.draft_name, self.value)
                self.catalog.update_menu_item(self.target_id, name=name, price=price)
        except ValueError as exc:
            self.error = str(exc)
            self._refresh_content()
            return

        self.mode = None
        self.value = ""
        self.draft_name = ""
        self.error = ""
        self._refresh_content()

    def _refresh_content(self) -> None:
        rows = catalog_rows(self.catalog)
        if self.cursor_index >= len(rows):
            self.cursor_index = max(0, len(rows) - 1)
        selected = rows[self.cursor_index] if rows else None
        category_names = {category.name for category in self.catalog.categories}

        content = Text(style="white")
        if not rows:
            content.append("(empty catalog)", style="dim")
        orphan_heading_shown = False
        for idx, (kind, row_id) in enumerate(rows):
            if idx > 0:
                content.append("\n")
            pointer = "➤ " if (kind, row_id) == selected else "  "
            if kind == "category":
                category = self.catalog.get_category(row_id)
                if category is not None:
                    content.append(f"{pointer}{icon_glyph(category.icon)} {category.name}", style="bold white")
                continue
            item = self.catalog.get_menu_item(row_id)
            if item is None:
                continue
            if item.category not in category_names and not orphan_heading_shown:
                content.append("  (no category)\n", style="dim")
                orphan_heading_shown = True
            content.append(f"{pointer}    {item.name}  ")
            content.append(format_money(item.price), style="dim")

        entry = ""
        if self.mode is not None:
            entry = f"{_PROMPTS[self.mode]}: {self.value}█"
        self.query_one("#catalog-body", Static).update(content)
        self.query_one("#catalog-entry", Static).update(entry)
        self.query_one("#catalog-error", Static).update(self.error)
        self.query_one("#catalog-help", Static).update(_ENTRY_HELP if self.mode is not None else _BROWSE_HELP)
