"""Rendering helpers for tables, orders and summaries."""

from __future__ import annotations

from decimal import Decimal

from rich.text import Text

from front_of_house.constant import CURRENCY_PREFIX
from front_of_house.data import order_status_label, payment_method_label, table_status_label
from front_of_house.models import DailySummary, Order, Table
from front_of_house.summary import payment_share


def format_money(amount: Decimal) -> str:
    """Format an amount as currency with two decimals."""
    return f"{CURRENCY_PREFIX} {amount.quantize(Decimal('0.01'))}"


def format_percent(value: Decimal) -> str:
    return f"{value.quantize(Decimal('0.1'))}%"


def badge_style(status: str) -> str:
    """Return a consistent badge style for table and order statuses."""
    if status in {"occupied", "completed"}:
        return "bold #ffffff on #b23a48"
    if status in {"reserved", "standby"}:
        return "bold #0b1f0f on #e0b341"
    return "bold #0b1f0f on #5fbf72"


def format_table_label(table: Table, order: Order | None = None) -> Text:
    """Render 'Table N' with its status badge and, if any, the running total."""
    text = Text()
    text.append(f"Table {table.number} ")
    text.append(f" {table_status_label(table.status)} ", style=badge_style(table.status))
    if order is not None:
        text.append(f"  {format_money(order.total)}")
        if order.status == "standby":
            text.append(f" ({order_status_label(order.status)})", style="dim")
    return text


def format_order_lines(order: Order, selected_index: int | None = None) -> Text:
    lines = Text()
    if not order.items:
        lines.append("(no items yet)", style="dim")
    for idx, item in enumerate(order.items):
        if idx > 0:
            lines.append("\n")
        pointer = "➤ " if idx == selected_index else "  "
        lines.append(f"{pointer}{item.quantity}x {item.menu_item.name}")
        lines.append(f"  {format_money(item.menu_item.price)}", style="dim")
        lines.append(f"  = {format_money(item.line_total)}")
    lines.append("\n\n")
    lines.append(f"Total: {format_money(order.total)}", style="bold")
    lines.append("  ")
    lines.append(f" {order_status_label(order.status)} ", style=badge_style(order.status))
    return lines


def format_summary(summary: DailySummary, is_today: bool) -> Text:
    """Render the four summary figures shown for one day."""
    day = "Today" if is_today else summary.date.strftime("%d/%m/%Y")
    cash = summary.payment_methods["cash"]
    electronic = summary.payment_methods["card"] + summary.payment_methods["pix"]

    text = Text()
    text.append(f"{day}\n\n", style="bold")
    text.append(f"Revenue:          {format_money(summary.total_revenue)}\n")
    text.append(f"Completed orders: {summary.completed_orders}\n\n")
    text.append(f"{payment_method_label('cash')}:  {format_money(cash)}")
    text.append(f"  ({format_percent(payment_share(summary, 'cash'))} of total)\n", style="dim")
    text.append(f"{payment_method_label('card')} + {payment_method_label('pix')}: {format_money(electronic)}")
    text.append(f"  ({format_percent(payment_share(summary, 'card', 'pix'))} of total)", style="dim")
    return text
