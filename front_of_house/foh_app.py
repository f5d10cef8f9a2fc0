"""Main Textual app class."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.widgets import Header, Static

from front_of_house.catalog_modal import CatalogModal
from front_of_house.config import DB_PATH, DEBUG_LOG_PATH
from front_of_house.coordinator import FrontOfHouse
from front_of_house.data import icon_glyph, payment_method_label
from front_of_house.models import MenuItem, Order, Table
from front_of_house.payment_modal import PaymentModal
from front_of_house.persistence import SqliteSnapshotStore
from front_of_house.printer import check_printer_dependencies, print_order_bill
from front_of_house.rendering import format_money, format_order_lines, format_table_label
from front_of_house.summary_modal import SummaryModal

logger = logging.getLogger("front_of_house")


class FrontOfHouseApp(App):
    """A Textual app for running tables, orders and the daily till."""

    TITLE = "Front of House"
    SUB_TITLE = "Tables / Orders / Summary"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #tables-pane {
        width: 2fr;
        border: round $primary;
        padding: 1;
    }

    #order-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #menu-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #tables-list, #order-body, #results {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    query = reactive("")
    selected_index = reactive(0)
    table_selected_index = reactive(None)
    line_selected_index = reactive(None)

    BINDINGS = [
        ("tab", "cycle_results(1)", "Next result"),
        ("up", "cycle_results(-1)", "Previous"),
        ("down", "cycle_results(1)", "Next"),
        ("enter", "register_selected", "Add item"),
        ("backspace", "backspace_query", "Delete query char"),
        ("ctrl+c", "cancel_active_mode", "Exit search"),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(self, foh: FrontOfHouse | None = None, debug_log_path: str = DEBUG_LOG_PATH) -> None:
        super().__init__()
        self._attach_debug_log(Path(debug_log_path))
        if foh is None:
            store = SqliteSnapshotStore(DB_PATH)
            store.bootstrap_schema()
            foh = FrontOfHouse.from_store(store)
        self.foh = foh
        self.system_status = ""
        logger.debug("app_init tables=%d orders=%d", len(foh.tables.tables), len(foh.ledger.orders))

    @staticmethod
    def _attach_debug_log(path: Path) -> None:
        if any(getattr(h, "baseFilename", None) == str(path) for h in logger.handlers):
            return
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(path, encoding="utf-8")
        except OSError:
            # No debug trail when the path is not writable; the app still runs.
            return
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="tables-pane"):
                yield Static("Tables", classes="pane-title")
                yield Static("(no tables yet)", id="tables-list")
            with Vertical(id="order-pane"):
                yield Static("Order", id="order-title", classes="pane-title")
                yield Static(id="order-body")
            with Vertical(id="menu-pane"):
                yield Static(id="search-bar")
                yield Static(id="results")

    def on_mount(self) -> None:
        _, msg = check_printer_dependencies()
        self.system_status = msg
        logger.debug("on_mount printer_status=%r", msg)
        if self.foh.tables.tables:
            self.table_selected_index = 0
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, (PaymentModal, SummaryModal, CatalogModal)):
            return
        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        if self.input_state == "active":
            self.query += event.character
            self.selected_index = 0
            self._refresh_search()
            event.stop()
            return

        handlers = {
            "j": lambda: self._move_table_selection(1),
            "k": lambda: self._move_table_selection(-1),
            "a": self._add_table,
            "x": self._remove_table,
            "r": self._toggle_reserved,
            "o": self._open_or_resume_order,
            "m": self._enter_menu_search,
            "]": lambda: self._move_line_selection(1),
            "[": lambda: self._move_line_selection(-1),
            "d": self._remove_selected_line,
            "s": self._park_current_order,
            "p": self._complete_current_order,
            "b": self._print_current_bill,
            "v": self._show_summary,
            "c": self._show_catalog,
        }
        handler = handlers.get(event.character.lower())
        if handler is None:
            return
        logger.debug("on_key key=%r table=%r", event.character, self.table_selected_index)
        handler()
        event.stop()

    def action_cancel_active_mode(self) -> None:
        if self.input_state == "normal":
            return
        self.input_state = "normal"
        self.query = ""
        self.selected_index = 0
        self._refresh_search()

    def action_cycle_results(self, delta: int) -> None:
        if self.input_state != "active":
            self._move_table_selection(delta)
            return

        results = self._filtered_results()
        if not results:
            self.selected_index = 0
            self._refresh_results(results)
            return
        self.selected_index = (self.selected_index + delta) % len(results)
        self._refresh_results(results)

    def action_register_selected(self) -> None:
        if self.input_state != "active":
            return
        order = self._current_order()
        if order is None or not order.is_open:
            self._set_status("Open an order on a table first (O)")
            return

        results = self._filtered_results()
        if not results:
            return
        item = results[self.selected_index]
        updated = self.foh.add_item(order.id, item.id)
        if updated is not None:
            found = updated.find_item(item.id)
            self.line_selected_index = updated.items.index(found) if found is not None else None
        self._refresh_all()

    def action_backspace_query(self) -> None:
        if self.input_state != "active" or not self.query:
            return
        self.query = self.query[:-1]
        self.selected_index = 0
        self._refresh_search()

    def _selected_table(self) -> Table | None:
        tables = self.foh.tables.tables
        if self.table_selected_index is None or not (0 <= self.table_selected_index < len(tables)):
            return None
        return tables[self.table_selected_index]

    def _current_order(self) -> Order | None:
        table = self._selected_table()
        if table is None:
            return None
        return self.foh.order_for_table(table.id)

    def _set_status(self, message: str) -> None:
        self.system_status = message
        logger.debug("status %r", message)
        self._refresh_search()

    def _move_table_selection(self, delta: int) -> None:
        tables = self.foh.tables.tables
        if not tables:
            return
        if self.table_selected_index is None:
            self.table_selected_index = 0 if delta > 0 else len(tables) - 1
        else:
            self.table_selected_index = (self.table_selected_index + delta) % len(tables)
        self.line_selected_index = None
        self._refresh_all()

    def _move_line_selection(self, delta: int) -> None:
        order = self._current_order()
        if order is None or not order.items:
            return
        if self.line_selected_index is None:
            self.line_selected_index = 0 if delta > 0 else len(order.items) - 1
        else:
            self.line_selected_index = (self.line_selected_index + delta) % len(order.items)
        self._refresh_order()

    def _add_table(self) -> None:
        table = self.foh.tables.add_table()
        self.table_selected_index = table.number - 1
        self._set_status(f"Table {table.number} added")
        self._refresh_all()

    def _remove_table(self) -> None:
        tables = self.foh.tables.tables
        if tables and tables[-1].status == "occupied":
            self._set_status(f"Table {tables[-1].number} is occupied")
            return
        removed = self.foh.tables.remove_table()
        if removed is None:
            return
        remaining = len(tables) - 1
        if self.table_selected_index is not None and self.table_selected_index >= remaining:
            self.table_selected_index = remaining - 1 if remaining else None
        self._set_status(f"Table {removed.number} removed")
        self._refresh_all()

    def _toggle_reserved(self) -> None:
        table = self._selected_table()
        if table is None:
            return
        if self.foh.tables.toggle_reserved(table.id) is None:
            self._set_status("Occupied tables cannot be reserved")
            return
        self._refresh_all()

    def _open_or_resume_order(self) -> None:
        table = self._selected_table()
        if table is None:
            return
        if table.status == "reserved":
            self._set_status(f"Table {table.number} is reserved (R to release)")
            return
        if table.status == "available":
            order_id = self.foh.open_order(table.id)
            self._set_status(f"Order opened on table {table.number}")
            logger.debug("order_opened order_id=%s", order_id)
            self._enter_menu_search()
            return

        order = self._current_order()
        if order is not None and order.status == "standby":
            self.foh.resume_order(order.id)
            self._set_status(f"Order on table {table.number} resumed")
        self._refresh_all()

    def _enter_menu_search(self) -> None:
        self.input_state = "active"
        self.query = ""
        self.selected_index = 0
        self._refresh_all()

    def _remove_selected_line(self) -> None:
        order = self._current_order()
        if order is None or self.line_selected_index is None:
            return
        if not (0 <= self.line_selected_index < len(order.items)):
            self.line_selected_index = None
            self._refresh_order()
            return
        line = order.items[self.line_selected_index]
        updated = self.foh.ledger.remove_item_from_order(order.id, line.menu_item.id)
        if updated is None or not updated.items:
            self.line_selected_index = None
        else:
            self.line_selected_index = min(self.line_selected_index, len(updated.items) - 1)
        self._refresh_all()

    def _park_current_order(self) -> None:
        order = self._current_order()
        if order is None or order.status != "active":
            return
        self.foh.park_order(order.id)
        self._set_status("Order on standby")
        self._refresh_all()

    def _complete_current_order(self) -> None:
        order = self._current_order()
        table = self._selected_table()
        if order is None or table is None:
            return
        if not order.items:
            self._set_status("Nothing to complete")
            return

        def finish(method: str | None) -> None:
            if method is None:
                return
            if self.foh.complete_order(order.id, method):
                self.line_selected_index = None
                self._set_status(
                    f"Table {table.number} paid {format_money(order.total)} ({payment_method_label(method)})"
                )
                logger.debug("order_completed order_id=%s method=%s", order.id, method)
            self._refresh_all()

        self.push_screen(PaymentModal(order, table.number), finish)

    def _print_current_bill(self) -> None:
        order = self._current_order()
        table = self._selected_table()
        if order is None or table is None or not order.items:
            self._set_status("Nothing to print")
            return
        try:
            print_order_bill(order, table.number)
        except Exception as exc:
            self._set_status(f"Print failed: {exc}")
            logger.debug("print_failed order_id=%s error=%r", order.id, exc)
            return
        self._set_status(f"Bill printed for table {table.number}")

    def _show_summary(self) -> None:
        self.push_screen(SummaryModal(self.foh.summary))

    def _show_catalog(self) -> None:
        self.push_screen(CatalogModal(self.foh.catalog, on_change=self._refresh_all))

    def _filtered_results(self) -> list[MenuItem]:
        source = self.foh.catalog.menu_items
        if not self.query:
            return source
        q = self.query.lower()
        return [item for item in source if q in item.name.lower() or q in item.category.lower()]

    def _refresh_all(self) -> None:
        self._refresh_tables()
        self._refresh_order()
        self._refresh_search()

    def _refresh_tables(self) -> None:
        try:
            tables_widget = self.query_one("#tables-list", Static)
        except NoMatches:
            return
        tables = self.foh.tables.tables
        if not tables:
            self.table_selected_index = None
            tables_widget.update("(no tables yet)\n\nA add table")
            return
        if self.table_selected_index is not None and self.table_selected_index >= len(tables):
            self.table_selected_index = len(tables) - 1

        lines = Text()
        for idx, table in enumerate(tables):
            if idx > 0:
                lines.append("\n")
            pointer = "➤ " if idx == self.table_selected_index else "  "
            lines.append(pointer)
            order = self.foh.ledger.get(table.current_order_id) if table.current_order_id else None
            lines.append_text(format_table_label(table, order))
        tables_widget.update(lines)

    def _refresh_order(self) -> None:
        try:
            title = self.query_one("#order-title", Static)
            body = self.query_one("#order-body", Static)
        except NoMatches:
            return
        table = self._selected_table()
        if table is None:
            title.update("Order")
            body.update("")
            return
        title.update(f"Order - Table {table.number}")
        order = self._current_order()
        if order is None:
            body.update("Free. O open order, R reserve." if table.status == "available" else "Reserved.")
            return
        if self.line_selected_index is not None and self.line_selected_index >= len(order.items):
            self.line_selected_index = len(order.items) - 1 if order.items else None
        body.update(format_order_lines(order, self.line_selected_index))

    def _refresh_search(self) -> None:
        self._refresh_search_bar()
        if self.input_state == "normal":
            self._refresh_results([])
            return
        self._refresh_results(self._filtered_results())

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#search-bar", Static)
        except NoMatches:
            return
        if self.input_state == "normal":
            status = self.system_status or "Ready"
            bar.update(f"M menu, [ ] D lines, S standby, P pay, B bill, V summary, C catalog (edit menu)\n{status}")
            return
        bar.update(Text(f"Menu: {self.query}|  (Enter add, Ctrl+C leave)\n{self.system_status}"))

    def _refresh_results(self, results: list[MenuItem]) -> None:
        try:
            results_widget = self.query_one("#results", Static)
        except NoMatches:
            return
        if self.input_state == "normal":
            results_widget.update("")
            return
        if not results:
            results_widget.update("No results")
            return
        if self.selected_index >= len(results):
            self.selected_index = 0

        glyphs = {category.name: icon_glyph(category.icon) for category in self.foh.catalog.categories}
        lines = Text()
        for idx, item in enumerate(results):
            if idx > 0:
                lines.append("\n")
            pointer = "➤ " if idx == self.selected_index else "  "
            lines.append(f"{pointer}{glyphs.get(item.category, icon_glyph(''))} {item.name}")
            lines.append(f"  {format_money(item.price)}", style="dim")
        results_widget.update(lines)
