"""Payment method modal shown before completing an order."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from front_of_house.data import payment_method_label
from front_of_house.models import PAYMENT_METHODS, Order
from front_of_house.rendering import format_money


class PaymentModal(ModalScreen[str | None]):
    """Pick how the table paid. Dismisses with the method or None on cancel."""

    CSS = """
    PaymentModal {
        align: center middle;
        background: $background 60%;
    }

    #payment-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #payment-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #payment-body {
        color: white;
        margin-bottom: 1;
    }

    #payment-help {
        color: #dddddd;
    }
    """

    def __init__(self, order: Order, table_number: int | None) -> None:
        super().__init__()
        self.order = order
        self.table_number = table_number
        self.cursor_index = 0

    def compose(self) -> ComposeResult:
        with Container(id="payment-dialog"):
            yield Static(f"Complete order - Table {self.table_number}", id="payment-title")
            yield Static(id="payment-body")
            yield Static("1/2/3 or J/K pick. Enter confirm. Esc/q/Ctrl+C cancel.", id="payment-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "q", "ctrl+c"}:
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            self.dismiss(PAYMENT_METHODS[self.cursor_index])
            event.stop()
            return

        if event.key in {"j", "down"}:
            self.cursor_index = (self.cursor_index + 1) % len(PAYMENT_METHODS)
        elif event.key in {"k", "up"}:
            self.cursor_index = (self.cursor_index - 1) % len(PAYMENT_METHODS)
        elif event.is_printable and event.character and event.character.isdigit():
            picked = int(event.character) - 1
            if 0 <= picked < len(PAYMENT_METHODS):
                self.cursor_index = picked
        else:
            return
        self._refresh_content()
        event.stop()

    def _refresh_content(self) -> None:
        body = self.query_one("#payment-body", Static)
        content = Text(style="white")
        content.append(f"Total: {format_money(self.order.total)}\n\n", style="bold")
        for idx, method in enumerate(PAYMENT_METHODS):
            if idx > 0:
                content.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            style = "bold white" if idx == self.cursor_index else "white"
            content.append(f"{pointer}{idx + 1}. {payment_method_label(method)}", style=style)
        body.update(content)
