"""Daily summary modal screen."""

from __future__ import annotations

from datetime import date

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from front_of_house.rendering import format_summary
from front_of_house.summary import SummaryAggregator


class SummaryModal(ModalScreen[None]):
    """Revenue for one day, with the days that have completed orders to cycle through."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
        ("h", "cycle_day(-1)", "Newer day"),
        ("l", "cycle_day(1)", "Older day"),
        ("left", "cycle_day(-1)", "Newer day"),
        ("right", "cycle_day(1)", "Older day"),
    ]

    CSS = """
    SummaryModal {
        align: center middle;
        background: $background 60%;
    }

    #summary-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #summary-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #summary-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, aggregator: SummaryAggregator) -> None:
        super().__init__()
        self.aggregator = aggregator
        today = aggregator.today()
        # Today is always selectable, even before the first completed order.
        self.days: list[date] = [today] + [day for day in aggregator.get_available_dates() if day != today]
        self.day_index = 0

    def compose(self) -> ComposeResult:
        with Container(id="summary-dialog"):
            yield Static("Daily Summary", id="summary-title")
            yield Static(id="summary-body")
            yield Static("H/L/←/→ change day, Esc/q/Ctrl+C close", id="summary-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def action_close(self) -> None:
        self.dismiss()

    def action_cycle_day(self, delta: int) -> None:
        self.day_index = (self.day_index + delta) % len(self.days)
        self._refresh_content()

    def _refresh_content(self) -> None:
        day = self.days[self.day_index]
        summary = self.aggregator.get_daily_summary(day)
        self.query_one("#summary-body", Static).update(format_summary(summary, is_today=self.day_index == 0))
